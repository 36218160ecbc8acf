"""
1D PDE Model: Heat equation along a bar.

    du/dt = alpha * d^2u/dx^2 + F(x) / (rho * c)

Boundary Conditions:
    Left end  (x=0): du/dx = 0        (Neumann, insulated)
    Right end (x=L): u = u0           (Dirichlet, fixed temperature)

Method: Backward Euler in time, central differences in space. Each step
solves the tridiagonal system

    -r u_{i-1} + (1 + 2r) u_i - r u_{i+1} = u_i^old + dt/(rho c) F_i,
    r = alpha * dt / dx^2

directly with the Thomas algorithm in O(n). The scheme is unconditionally
stable, so dt is fixed to tmax / 1000 regardless of the material.

References:
- Strikwerda JC. Finite Difference Schemes and Partial Differential
  Equations. 2nd ed. SIAM, 2004.
  (Chapters 6-7: Implicit schemes for the heat equation)
"""

import numpy as np

from heatsim.models.source import make_source_1d, grid_coordinates
from heatsim.models.validation import validate_domain
from heatsim.utils.parameters import KELVIN_OFFSET, N_STEPS, SOURCE_SCALE


def solve_tridiagonal(a, b, c, d):
    """
    Solve a tridiagonal system with the Thomas algorithm (TDMA).

    Row i reads  a[i] x[i-1] + b[i] x[i] + c[i] x[i+1] = d[i].
    a[0] and c[n-1] are ignored.

    Parameters
    ----------
    a, b, c : array_like of shape (n,)
        Sub-, main and super-diagonal.
    d : array_like of shape (n,)
        Right-hand side.

    Returns
    -------
    x : ndarray of shape (n,)
    """
    b = np.asarray(b, dtype=float)
    n = len(b)
    c_prime = np.empty(n)
    d_prime = np.empty(n)

    # Forward elimination
    c_prime[0] = c[0] / b[0] if n > 1 else 0.0
    d_prime[0] = d[0] / b[0]
    for i in range(1, n):
        denom = b[i] - a[i] * c_prime[i - 1]
        c_prime[i] = c[i] / denom if i < n - 1 else 0.0
        d_prime[i] = (d[i] - a[i] * d_prime[i - 1]) / denom

    # Back substitution
    x = np.empty(n)
    x[n - 1] = d_prime[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = d_prime[i] - c_prime[i] * x[i + 1]
    return x


class HeatEquation1D:
    """
    Implicit finite difference solver for the 1D heat equation.

    Parameters
    ----------
    material : Material
        Conductivity, density and specific heat of the bar.
    L : float
        Bar length (m).
    tmax : float
        Simulation horizon (s). The time step is tmax / 1000.
    u0 : float
        Initial temperature and Dirichlet temperature at x=L (deg C).
    f : float
        Heat source amplitude.
    n : int
        Number of grid points (>= 2).
    source_scale : float
        Visualisation amplification applied to the source intensity.
    """

    def __init__(self, material, L, tmax, u0, f, n, source_scale=SOURCE_SCALE):
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

        self._t = 0.0
        self._n_steps = 0
        self._u = np.full(n, self.u0_kelvin)
        self._F = make_source_1d(L, n, tmax, f, scale=source_scale)
        self._F.flags.writeable = False

        self._build_system()

    def _build_system(self):
        """Assemble the (time-independent) tridiagonal matrix."""
        n = self.n
        r = self.material.alpha() * self.dt / self.dx**2
        self.r = r
        self._coef = self.dt / self.material.volumetric_heat_capacity

        self._a = np.full(n, -r)
        self._b = np.full(n, 1.0 + 2.0 * r)
        self._c = np.full(n, -r)

        # Neumann at x=0: ghost point u_{-1} = u_1 folded into the diagonal
        self._b[0] = 1.0 + r
        self._c[0] = -r

        # Dirichlet at x=L
        self._a[n - 1] = 0.0
        self._b[n - 1] = 1.0
        self._c[n - 1] = 0.0

    def step(self):
        """
        Advance the solution by one time step.

        Returns
        -------
        bool
            False if tmax has already been reached (state left untouched).
        """
        if self._n_steps >= N_STEPS or self._t >= self.tmax:
            return False

        d = self._u + self._coef * self._F
        d[-1] = self.u0_kelvin

        self._u[:] = solve_tridiagonal(self._a, self._b, self._c, d)
        self._t += self.dt
        self._n_steps += 1
        return True

    def reset(self):
        """Return to t=0 and the uniform initial temperature."""
        self._t = 0.0
        self._n_steps = 0
        self._u.fill(self.u0_kelvin)

    def get_temperature(self):
        """Current temperature field (K) as a read-only view of shape (n,)."""
        view = self._u.view()
        view.flags.writeable = False
        return view

    def get_source(self):
        """Heat source F(x) as a read-only array of shape (n,)."""
        return self._F

    def get_time(self):
        return self._t

    def get_tmax(self):
        return self.tmax

    def get_n(self):
        return self.n

    def simulate(self, save_every=1):
        """
        Step until tmax, storing the field every `save_every` steps.

        Returns
        -------
        t : ndarray of shape (nt,)
            Snapshot times, starting with the current time.
        T_field : ndarray of shape (n, nt)
            T_field[i, k] = u(x_i, t_k) in Kelvin.
        """
        times = [self._t]
        fields = [self._u.copy()]
        k = 0
        while self.step():
            k += 1
            if k % save_every == 0:
                times.append(self._t)
                fields.append(self._u.copy())
        if k % save_every != 0:
            times.append(self._t)
            fields.append(self._u.copy())
        return np.array(times), np.stack(fields, axis=1)
