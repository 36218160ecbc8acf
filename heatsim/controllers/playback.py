"""
Playback controller for one or more solvers.

Decides how many implicit steps are taken per displayed frame and keeps
the pause / speed state of an interactive viewer, without any windowing.
Each solver is an independent instance; the controller only calls
step() and reset() on them.

Key bindings (handle_key):
    space  -> pause / resume
    r      -> reset all solvers and resume
    up     -> speed + SPEED_STEP (capped per dimensionality)
    down   -> speed - SPEED_STEP (at least 1)
    escape -> stop
"""

from heatsim.utils.parameters import (
    SPEED_INITIAL, SPEED_STEP, SPEED_MAX_1D, SPEED_MAX_2D
)


class PlaybackController:
    """
    Pause / speed / reset state machine driving a group of solvers.

    Parameters
    ----------
    solvers : sequence
        HeatEquation1D or HeatEquation2D instances, stepped together.
    dim : int
        1 or 2; selects the speed cap.
    speed : int
        Initial number of steps per frame.
    """

    def __init__(self, solvers, dim=1, speed=SPEED_INITIAL):
        if dim not in (1, 2):
            raise ValueError(f"dim must be 1 or 2, got {dim!r}")
        self.solvers = list(solvers)
        self.dim = dim
        self.speed_max = SPEED_MAX_1D if dim == 1 else SPEED_MAX_2D
        self.speed = max(1, min(speed, self.speed_max))
        self.paused = False
        self.running = True
        self.finished = False

    def toggle_pause(self):
        self.paused = not self.paused

    def speed_up(self):
        self.speed = min(self.speed_max, self.speed + SPEED_STEP)

    def speed_down(self):
        self.speed = max(1, self.speed - SPEED_STEP)

    def reset(self):
        """Reset every solver to t=0 and resume."""
        for s in self.solvers:
            s.reset()
        self.paused = False
        self.finished = False

    def stop(self):
        self.running = False

    def is_finished(self):
        """True once a frame found that no solver could step any further."""
        return self.finished

    def advance(self):
        """
        Run one frame: up to `speed` steps on every solver.

        When no solver makes progress the controller marks itself finished
        and pauses.

        Returns
        -------
        int
            Number of step rounds in which at least one solver advanced.
        """
        if self.paused or not self.running:
            return 0

        rounds = 0
        for _ in range(self.speed):
            progressed = [s.step() for s in self.solvers]
            if not any(progressed):
                self.finished = True
                self.paused = True
                break
            rounds += 1
        return rounds

    def handle_key(self, key):
        """Apply a key press; unknown keys are ignored."""
        actions = {
            'space': self.toggle_pause,
            'r': self.reset,
            'up': self.speed_up,
            'down': self.speed_down,
            'escape': self.stop,
        }
        action = actions.get(key.lower())
        if action is not None:
            action()

    def run(self, max_frames=None, on_frame=None):
        """
        Advance frames until the controller pauses (all solvers finished)
        or stop() is called.

        Parameters
        ----------
        max_frames : int, optional
            Upper bound on the number of frames.
        on_frame : callable(frame, controller), optional
            Called after each frame that advanced the solvers, e.g. to save
            a figure.

        Returns
        -------
        int
            Number of frames run.
        """
        frame = 0
        while self.running and (max_frames is None or frame < max_frames):
            rounds = self.advance()
            frame += 1
            if on_frame is not None and rounds > 0:
                on_frame(frame, self)
            if self.paused:
                break
        return frame
