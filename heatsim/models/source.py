"""
Static heat source patterns F(x) and F(x, y).

The source is computed once when a model is built and never changes
afterwards. Intensities are tmax * f^2, multiplied by a visualisation
scale so that heating is visible within the simulated horizon.

Grid points are sampled at x = i * dx with inclusive bounds: a point lying
exactly on the edge of a region belongs to it.
"""

import numpy as np

from heatsim.utils.parameters import SOURCE_SCALE, SOURCE_RATIO_1D


def grid_coordinates(L, n):
    """Grid point positions i * dx for i = 0..n-1."""
    dx = L / (n - 1)
    return np.arange(n) * dx


def make_source_1d(L, n, tmax, f, scale=SOURCE_SCALE):
    """
    Two rectangular heating bands along the bar.

        [L/10, 2L/10]  ->  tmax * f^2 * scale
        [5L/10, 6L/10] ->  0.75 * tmax * f^2 * scale

    Returns
    -------
    F : ndarray of shape (n,)
    """
    x = grid_coordinates(L, n)
    f1 = tmax * f * f
    f2 = SOURCE_RATIO_1D * tmax * f * f

    band1 = (x >= L / 10.0) & (x <= 2.0 * L / 10.0)
    band2 = (x >= 5.0 * L / 10.0) & (x <= 6.0 * L / 10.0) & ~band1

    F = np.zeros(n)
    F[band1] = f1 * scale
    F[band2] = f2 * scale
    return F


def make_source_2d(L, n, tmax, f, scale=SOURCE_SCALE):
    """
    Four square sources placed symmetrically on the plate.

    Each square spans [k L/6, (k+1) L/6] on both axes for k in {1, 4}
    and carries tmax * f^2 * scale.

    Returns
    -------
    F : ndarray of shape (n*n,)
        Flattened row-major, F[j*n + i] is the value at (i*dx, j*dx).
    """
    x = grid_coordinates(L, n)
    # indexing='xy': X[j, i] = x[i], Y[j, i] = x[j]
    X, Y = np.meshgrid(x, x, indexing='xy')

    def in_band(v, k):
        return (v >= k * L / 6.0) & (v <= (k + 1.0) * L / 6.0)

    in_source = np.zeros((n, n), dtype=bool)
    for kx in (1.0, 4.0):
        for ky in (1.0, 4.0):
            in_source |= in_band(X, kx) & in_band(Y, ky)

    F = np.where(in_source, tmax * f * f * scale, 0.0)
    return F.ravel()
