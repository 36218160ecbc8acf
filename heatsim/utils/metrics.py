"""
Summary quantities for a running simulation.

Everything here is assembled from the public accessors of the 1D / 2D
models, so the same functions serve both dimensionalities and any number
of materials side by side.
"""

import numpy as np


def temperature_rise(field, u0_kelvin):
    """
    Temperature increase above the boundary temperature.

    Parameters
    ----------
    field : ndarray
        Temperature field in Kelvin (any shape).
    u0_kelvin : float
        Boundary / initial temperature in Kelvin.

    Returns
    -------
    dT : ndarray
        Same shape as `field`.
    """
    return np.asarray(field, dtype=float) - u0_kelvin


def max_rise(field, u0_kelvin):
    """Largest temperature increase above u0 (0 if nowhere warmer)."""
    return max(0.0, float(np.max(temperature_rise(field, u0_kelvin))))


def progress(model):
    """Elapsed fraction of the simulation horizon, in [0, 1]."""
    return min(1.0, model.get_time() / model.get_tmax())


def simulation_summary(model):
    """
    Annotation data for one model: material, diffusivity, time and domain.

    Parameters
    ----------
    model : HeatEquation1D or HeatEquation2D

    Returns
    -------
    summary : dict
        Keys: 'material', 'alpha', 'time', 'tmax', 'progress', 'L', 'u0',
        'T_max', 'T_mean', 'dT_max'. Temperatures in Kelvin.
    """
    field = model.get_temperature()
    return {
        'material': model.material.name,
        'alpha': model.material.alpha(),
        'time': model.get_time(),
        'tmax': model.get_tmax(),
        'progress': progress(model),
        'L': model.L,
        'u0': model.u0_kelvin,
        'T_max': float(np.max(field)),
        'T_mean': float(np.mean(field)),
        'dT_max': max_rise(field, model.u0_kelvin),
    }


def compute_all_metrics(models):
    """
    Summaries for several models, keyed by material name.

    Parameters
    ----------
    models : iterable of HeatEquation1D / HeatEquation2D

    Returns
    -------
    dict
        {material_name: simulation_summary(model)}
    """
    return {m.material.name: simulation_summary(m) for m in models}
