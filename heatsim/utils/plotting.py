"""
Plotting utilities for the heat equation simulator.

Replaces an on-screen heatmap with saved figures: a T(x, t) map for the
bar, snapshots for the plate, and the 2x2 comparison of all materials.
All colour maps use 'inferno' (perceptually uniform).
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from heatsim.utils.metrics import temperature_rise, simulation_summary


def auto_range(field, margin=0.05, min_span=1.0):
    """
    Colour range covering `field` with a relative margin.

    If the span is below `min_span` the range is widened by half of
    `min_span` on each side, so a uniform field still gets a usable scale.

    Returns
    -------
    vmin, vmax : float
    """
    field = np.asarray(field, dtype=float)
    lo, hi = float(field.min()), float(field.max())
    pad = (hi - lo) * margin
    vmin, vmax = lo - pad, hi + pad
    if vmax - vmin < min_span:
        vmin -= min_span / 2.0
        vmax += min_span / 2.0
    return vmin, vmax


def shared_rise_range(models, margin=0.05):
    """
    Common temperature-rise range [0, dT_max] for several models.

    A maximum rise below 0.1 K is replaced by 1.0 so that the colour bar
    stays readable before any heating is visible.

    Returns
    -------
    vmin, vmax : float
    """
    dT_max = 0.0
    for m in models:
        dT = temperature_rise(m.get_temperature(), m.u0_kelvin)
        dT_max = max(dT_max, float(dT.max()))
    pad = dT_max * margin
    if dT_max < 0.1:
        dT_max = 1.0
    return 0.0, dT_max + pad


def _annotation(summary):
    return (f"{summary['material']}  alpha={summary['alpha']:.3e} m²/s\n"
            f"t = {summary['time']:.2f} / {summary['tmax']:.2f} s   "
            f"L = {summary['L']:.2f} m   u0 = {summary['u0']:.2f} K")


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved: {save_path}")
    plt.close(fig)
    return fig


def plot_1d_heatmap(t, x, T_field, title="1D Temperature Field",
                    save_path=None):
    """
    Heatmap of T(x, t) for the bar.

    Parameters
    ----------
    t : ndarray of shape (nt,)
    x : ndarray of shape (nx,)
    T_field : ndarray of shape (nx, nt)
        Temperatures in Kelvin.
    """
    fig, ax = plt.subplots(figsize=(12, 6))

    vmin, vmax = auto_range(T_field)
    im = ax.pcolormesh(t, x, T_field, shading='auto', cmap='inferno',
                       vmin=vmin, vmax=vmax)
    plt.colorbar(im, ax=ax, label='Temperature (K)')
    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('Position x (m)', fontsize=12)
    ax.set_title(title, fontsize=14)

    return _save(fig, save_path)


def plot_1d_profiles(x, T_field, t_array, title="1D Temperature Profiles",
                     save_path=None):
    """Overlay of u(x) at every stored time (darker = earlier)."""
    fig, ax = plt.subplots(figsize=(12, 6))

    colors = plt.cm.inferno(np.linspace(0.15, 0.85, T_field.shape[1]))
    for k, color in enumerate(colors):
        ax.plot(x, T_field[:, k], color=color, linewidth=1.2,
                label=f't = {t_array[k]:.2f} s')

    ax.set_xlabel('Position x (m)', fontsize=12)
    ax.set_ylabel('Temperature (K)', fontsize=12)
    ax.set_title(title, fontsize=14)
    if T_field.shape[1] <= 10:
        ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3)

    return _save(fig, save_path)


def plot_2d_snapshots(x, y, T_field_3d, times, t_array, title_prefix="2D Plate",
                      save_path=None):
    """
    Plot 2D temperature field snapshots at selected times.

    Parameters
    ----------
    x, y : ndarray
        Spatial coordinates.
    T_field_3d : ndarray of shape (ny, nx, nt)
        Row index j (y), column index i (x).
    times : list of float
        Times at which to take snapshots (nearest stored time is used).
    t_array : ndarray
        Full time array.
    """
    n_snaps = len(times)
    fig, axes = plt.subplots(1, n_snaps, figsize=(5 * n_snaps, 4))
    if n_snaps == 1:
        axes = [axes]

    vmin, vmax = auto_range(T_field_3d)
    for ax, t_snap in zip(axes, times):
        idx = np.argmin(np.abs(t_array - t_snap))
        im = ax.pcolormesh(x, y, T_field_3d[:, :, idx], shading='auto',
                           cmap='inferno', vmin=vmin, vmax=vmax)
        ax.set_title(f't = {t_array[idx]:.2f} s', fontsize=11)
        ax.set_xlabel('x (m)')
        ax.set_ylabel('y (m)')
        ax.set_aspect('equal')
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    plt.suptitle(f'{title_prefix} Temperature Field', fontsize=14)
    return _save(fig, save_path)


def plot_material_grid(models, title="All Materials", save_path=None):
    """
    2x2 comparison of the current temperature rise for several materials.

    All panels share one colour range so the materials can be compared
    directly. 1D models are drawn as a coloured strip under the profile.

    Parameters
    ----------
    models : sequence of HeatEquation1D or HeatEquation2D (at most 4)
    """
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    axes = axes.ravel()
    vmin, vmax = shared_rise_range(models)

    im = None
    for ax, model in zip(axes, models):
        summary = simulation_summary(model)
        if not hasattr(model, 'get_temperature_2d'):
            dT = temperature_rise(model.get_temperature(), model.u0_kelvin)
            strip_h = 0.15 * vmax
            im = ax.imshow(dT[None, :], extent=[0.0, model.L, -strip_h, 0.0],
                           aspect='auto', origin='lower', cmap='inferno',
                           vmin=vmin, vmax=vmax)
            ax.plot(model.x, dT, color='k', linewidth=1.2)
            ax.set_ylim(-strip_h, vmax)
            ax.set_xlabel('x (m)')
            ax.set_ylabel('ΔT (K)')
            ax.grid(True, alpha=0.3)
        else:
            dT = temperature_rise(model.get_temperature_2d(), model.u0_kelvin)
            im = ax.pcolormesh(model.x, model.y, dT, shading='auto',
                               cmap='inferno', vmin=vmin, vmax=vmax)
            ax.set_xlabel('x (m)')
            ax.set_ylabel('y (m)')
            ax.set_aspect('equal')
        ax.set_title(_annotation(summary), fontsize=10)

    for ax in axes[len(models):]:
        ax.axis('off')

    if im is not None:
        fig.colorbar(im, ax=list(axes), label='ΔT (K)', shrink=0.8)
    plt.suptitle(title, fontsize=14)

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved: {save_path}")
    plt.close(fig)
    return fig
