"""Tests for the playback controller."""

import numpy as np
import pytest

from heatsim.controllers.playback import PlaybackController
from heatsim.models.materials import MATERIALS, COPPER, GLASS
from heatsim.models.pde_1d_model import HeatEquation1D
from heatsim.models.pde_2d_model import HeatEquation2D
from heatsim.utils.parameters import N_STEPS, SPEED_MAX_1D, SPEED_MAX_2D


def make_bars(materials=MATERIALS, n=11):
    return [HeatEquation1D(m, L=1.0, tmax=16.0, u0=13.0, f=80.0, n=n)
            for m in materials]


class TestSpeed:
    def test_initial_speed(self):
        ctrl = PlaybackController(make_bars())
        assert ctrl.speed == 1
        assert ctrl.paused is False

    def test_speed_up_capped_1d(self):
        ctrl = PlaybackController(make_bars(), dim=1)
        ctrl.speed_up()
        assert ctrl.speed == 6
        for _ in range(20):
            ctrl.speed_up()
        assert ctrl.speed == SPEED_MAX_1D

    def test_speed_up_capped_2d(self):
        plate = HeatEquation2D(COPPER, 1.0, 16.0, 13.0, 80.0, 5)
        ctrl = PlaybackController([plate], dim=2)
        for _ in range(20):
            ctrl.speed_up()
        assert ctrl.speed == SPEED_MAX_2D

    def test_speed_down_floor(self):
        ctrl = PlaybackController(make_bars(), speed=12)
        ctrl.speed_down()
        assert ctrl.speed == 7
        ctrl.speed_down()
        ctrl.speed_down()
        assert ctrl.speed == 1

    def test_invalid_dim(self):
        with pytest.raises(ValueError):
            PlaybackController(make_bars(), dim=3)


class TestAdvance:
    def test_advance_steps_every_solver(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=5)
        assert ctrl.advance() == 5
        for b in bars:
            assert b.get_time() == pytest.approx(5 * b.dt)

    def test_paused_does_not_step(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=5)
        ctrl.toggle_pause()
        assert ctrl.advance() == 0
        assert all(b.get_time() == 0.0 for b in bars)
        ctrl.toggle_pause()
        assert ctrl.advance() == 5

    def test_pauses_when_all_finished(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=SPEED_MAX_1D)
        frames = ctrl.run()
        assert ctrl.paused is True
        assert ctrl.is_finished()
        # 1000 steps at 50 per frame, plus the frame that detects the end
        assert frames == N_STEPS // SPEED_MAX_1D + 1
        assert all(b.step() is False for b in bars)

    def test_run_respects_max_frames(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=3)
        assert ctrl.run(max_frames=4) == 4
        assert bars[0].get_time() == pytest.approx(12 * bars[0].dt)
        assert not ctrl.is_finished()

    def test_on_frame_callback(self):
        seen = []
        ctrl = PlaybackController(make_bars(), speed=10)
        ctrl.run(max_frames=3, on_frame=lambda frame, c: seen.append(frame))
        assert seen == [1, 2, 3]

    def test_no_callback_for_the_frame_that_detects_the_end(self):
        seen = []
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=SPEED_MAX_1D)
        ctrl.run(on_frame=lambda frame, c: seen.append(bars[0].get_time()))
        assert len(seen) == N_STEPS // SPEED_MAX_1D
        assert len(set(seen)) == len(seen)

    def test_finished_only_after_a_failed_step(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=SPEED_MAX_1D)
        ctrl.run(max_frames=N_STEPS // SPEED_MAX_1D)
        # every step succeeded, the horizon is not yet detected
        assert not ctrl.is_finished()
        assert ctrl.advance() == 0
        assert ctrl.is_finished()

    def test_reset_clears_finished(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=SPEED_MAX_1D)
        ctrl.run()
        ctrl.reset()
        assert not ctrl.is_finished()
        assert ctrl.advance() == SPEED_MAX_1D

    def test_independent_instances(self):
        """Stepping a group gives the same fields as stepping alone."""
        group = make_bars((COPPER, GLASS))
        alone = make_bars((GLASS,))[0]
        PlaybackController(group, speed=20).advance()
        for _ in range(20):
            alone.step()
        np.testing.assert_array_equal(group[1].get_temperature(),
                                      alone.get_temperature())


class TestKeys:
    def test_space_toggles_pause(self):
        ctrl = PlaybackController(make_bars())
        ctrl.handle_key('space')
        assert ctrl.paused is True
        ctrl.handle_key('SPACE')
        assert ctrl.paused is False

    def test_reset_key(self):
        bars = make_bars()
        ctrl = PlaybackController(bars, speed=10)
        ctrl.advance()
        ctrl.toggle_pause()
        ctrl.handle_key('r')
        assert ctrl.paused is False
        for b in bars:
            assert b.get_time() == 0.0
            assert np.all(b.get_temperature() == b.u0_kelvin)

    def test_arrow_keys(self):
        ctrl = PlaybackController(make_bars())
        ctrl.handle_key('up')
        assert ctrl.speed == 6
        ctrl.handle_key('down')
        assert ctrl.speed == 1

    def test_escape_stops(self):
        bars = make_bars()
        ctrl = PlaybackController(bars)
        ctrl.handle_key('escape')
        assert ctrl.running is False
        assert ctrl.advance() == 0
        assert ctrl.run() == 0

    def test_unknown_key_ignored(self):
        ctrl = PlaybackController(make_bars())
        ctrl.handle_key('q')
        assert ctrl.running and not ctrl.paused and ctrl.speed == 1
