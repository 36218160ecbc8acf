"""
Shared physical and numerical parameters for the heat equation simulator.

All units are SI unless otherwise noted. Temperatures entered by the user
are in deg C; the solvers work in Kelvin internally.
"""

# --- Units ---
KELVIN_OFFSET = 273.15   # deg C -> K

# --- Time discretisation ---
N_STEPS = 1000           # Number of implicit steps to reach tmax (dt = tmax / N_STEPS)

# --- Heat source ---
SOURCE_SCALE = 100.0     # Amplification of the source intensity so that heating
                         # is visible on screen; not a physical quantity
SOURCE_RATIO_1D = 0.75   # Second 1D band carries 75% of the first band's intensity

# --- Gauss-Seidel relaxation (2D) ---
GS_MAX_ITER = 100        # Maximum sweeps per time step
GS_TOL = 1e-6            # Stop once max |change| in a sweep drops below this (K)

# --- Default simulation inputs (text menu / CLI) ---
DOMAIN_LENGTH = 1.0      # Bar length / plate side (m)
T_MAX = 16.0             # Simulation horizon (s)
U0 = 13.0                # Initial and boundary temperature (deg C)
F_SOURCE = 80.0          # Source amplitude

# --- Grid resolution ---
NX_1D = 1001             # Grid points along the bar
NX_2D = 101              # Grid points per side of the plate
NX_QUICK = 51            # Coarse grid for --quick runs

# --- Playback ---
SPEED_INITIAL = 1        # Steps per frame at start
SPEED_STEP = 5           # Increment for speed up / down
SPEED_MAX_1D = 50        # Max steps per frame, 1D
SPEED_MAX_2D = 20        # Max steps per frame, 2D (each step is far more expensive)
