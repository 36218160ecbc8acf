"""
2D PDE Model: Heat equation on a square plate [0, L]^2.

    du/dt = alpha * (d^2u/dx^2 + d^2u/dy^2) + F(x, y) / (rho * c)

Boundary Conditions:
    Left   (x=0), bottom (y=0): zero flux (Neumann), mirrored neighbour
    Right  (x=L), top    (y=L): u = u0 (Dirichlet); takes precedence at the
                                shared corners

Method: Backward Euler with the five-point stencil. The implicit system

    (1 + 4r) u_ij - r (u_{i-1,j} + u_{i+1,j} + u_{i,j-1} + u_{i,j+1})
        = u_ij^old + dt/(rho c) F_ij

is relaxed with Gauss-Seidel sweeps (at most GS_MAX_ITER, stopping once the
largest change in a sweep falls below GS_TOL).

Within a row the Gauss-Seidel update is a first-order linear recurrence in
i (the left neighbour is the value just computed), so each row is relaxed
with one call to scipy.signal.lfilter. Rows are swept bottom to top, which
keeps the lexicographic visiting order of a point-by-point sweep.

The field is stored flattened, row-major: index(i, j) = j * n + i, where i
runs along x and j along y.

References:
- Strikwerda JC. Finite Difference Schemes and Partial Differential
  Equations. 2nd ed. SIAM, 2004.
  (Chapter 9: Multi-dimensional problems)
- Saad Y. Iterative Methods for Sparse Linear Systems. 2nd ed. SIAM, 2003.
  (Chapter 4: Basic iterative methods)
"""

import numpy as np
from scipy.signal import lfilter

from heatsim.models.source import make_source_2d, grid_coordinates
from heatsim.models.validation import validate_domain
from heatsim.utils.parameters import (
    KELVIN_OFFSET, N_STEPS, SOURCE_SCALE, GS_MAX_ITER, GS_TOL
)


class HeatEquation2D:
    """
    Implicit finite difference solver for the 2D heat equation.

    Parameters
    ----------
    material : Material
        Conductivity, density and specific heat of the plate.
    L : float
        Side length of the plate (m).
    tmax : float
        Simulation horizon (s). The time step is tmax / 1000.
    u0 : float
        Initial temperature and Dirichlet temperature (deg C).
    f : float
        Heat source amplitude.
    n : int
        Grid points per side (>= 2).
    source_scale : float
        Visualisation amplification applied to the source intensity.
    max_iter : int
        Maximum Gauss-Seidel sweeps per time step.
    tol : float
        Sweep stops once max |change| is below this value (K).
    """

    def __init__(self, material, L, tmax, u0, f, n, source_scale=SOURCE_SCALE,
                 max_iter=GS_MAX_ITER, tol=GS_TOL):
        validate_domain(material, L, tmax, u0, f, n)

        self.material = material
        self.L = L
        self.tmax = tmax
        self.u0 = u0
        self.f = f
        self.n = n
        self.dx = L / (n - 1)
        self.dt = tmax / N_STEPS
        self.u0_kelvin = u0 + KELVIN_OFFSET
        self.x = grid_coordinates(L, n)
        self.y = self.x
        self.max_iter = max_iter
        self.tol = tol

        self.r = material.alpha() * self.dt / self.dx**2
        self._coef = self.dt / material.volumetric_heat_capacity

        self._t = 0.0
        self._n_steps = 0
        self._u = np.full(n * n, self.u0_kelvin)
        self._F = make_source_2d(L, n, tmax, f, scale=source_scale)
        self._F.flags.writeable = False

        # Diagnostics from the last step
        self.last_iterations = 0
        self.last_max_delta = 0.0

    def index(self, i, j):
        """Flat index of grid point (i, j)."""
        return j * self.n + i

    def _sweep(self, w, rhs):
        """
        One in-place Gauss-Seidel sweep over w (shape (n, n), row = j).

        Returns the largest absolute change over the non-Dirichlet points.
        """
        n = self.n
        r = self.r
        diag = 1.0 / (1.0 + 4.0 * r)
        k = r * diag
        u_b = self.u0_kelvin
        max_diff = 0.0

        for j in range(n - 1):
            old = w[j].copy()
            # j=0: mirror, row 1 has not been visited yet in this sweep
            down = w[j - 1] if j > 0 else w[1]
            up = w[j + 1]

            # Everything except the left neighbour, which is the recurrence
            b = diag * (rhs[j, :-1] + r * (old[1:] + down[:-1] + up[:-1]))
            # i=0: mirror, left neighbour is the old value at i=1
            b[0] += k * old[1]
            new = lfilter([1.0], [1.0, -k], b)

            max_diff = max(max_diff, float(np.max(np.abs(new - old[:-1]))))
            w[j, :-1] = new
            w[j, -1] = u_b

        w[n - 1, :] = u_b
        return max_diff

    def step(self):
        """
        Advance one time step using Gauss-Seidel iteration.

        Returns
        -------
        bool
            False if tmax has already been reached (state left untouched).
        """
        if self._n_steps >= N_STEPS or self._t >= self.tmax:
            return False

        n = self.n
        u_old = self._u.reshape(n, n)
        rhs = u_old + self._coef * self._F.reshape(n, n)
        w = u_old.copy()

        max_diff = 0.0
        iterations = 0
        for _ in range(self.max_iter):
            iterations += 1
            max_diff = self._sweep(w, rhs)
            if max_diff < self.tol:
                break

        self.last_iterations = iterations
        self.last_max_delta = max_diff

        self._u[:] = w.ravel()
        self._t += self.dt
        self._n_steps += 1
        return True

    def reset(self):
        """Return to t=0 and the uniform initial temperature."""
        self._t = 0.0
        self._n_steps = 0
        self._u.fill(self.u0_kelvin)
        self.last_iterations = 0
        self.last_max_delta = 0.0

    def get_temperature(self):
        """Flattened temperature field (K), read-only view of shape (n*n,)."""
        view = self._u.view()
        view.flags.writeable = False
        return view

    def get_temperature_at(self, i, j):
        """Temperature (K) at grid point (i, j)."""
        return self._u[self.index(i, j)]

    def get_temperature_2d(self):
        """
        Full temperature field as an (n, n) array.

        Row index is j (y), column index is i (x):
        result[j, i] = field[index(i, j)].
        """
        result = self._u.reshape(self.n, self.n).copy()
        result.flags.writeable = False
        return result

    def get_source(self):
        """Heat source, flattened like the temperature field."""
        return self._F

    def get_time(self):
        return self._t

    def get_tmax(self):
        return self.tmax

    def get_n(self):
        return self.n

    def simulate(self, save_every=10):
        """
        Step until tmax, storing the field every `save_every` steps.

        Returns
        -------
        t : ndarray of shape (nt,)
        T_field : ndarray of shape (n, n, nt)
            T_field[j, i, k] = u(x_i, y_j, t_k) in Kelvin.
        """
        times = [self._t]
        fields = [self.get_temperature_2d()]
        k = 0
        while self.step():
            k += 1
            if k % save_every == 0:
                times.append(self._t)
                fields.append(self.get_temperature_2d())
        if k % save_every != 0:
            times.append(self._t)
            fields.append(self.get_temperature_2d())
        return np.array(times), np.stack(fields, axis=2)
