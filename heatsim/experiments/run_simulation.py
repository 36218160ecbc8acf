"""
Run the heat equation for one or all materials and save the figures.

Usage:
    heatsim-run                          # 1D bar, all 4 materials
    heatsim-run --dim 2                  # 2D plate
    heatsim-run --material copper --tmax 8
    heatsim-run --quick                  # coarse grid for testing
    heatsim-run --interactive            # text menu

Outputs go to ./results/ (or --output).
"""

import argparse
import math
from pathlib import Path

import numpy as np

from heatsim.controllers.playback import PlaybackController
from heatsim.experiments.menu import run_menu
from heatsim.models.materials import MATERIALS, get_material
from heatsim.models.pde_1d_model import HeatEquation1D
from heatsim.models.pde_2d_model import HeatEquation2D
from heatsim.models.validation import InvalidDomainParameters
from heatsim.utils.metrics import compute_all_metrics
from heatsim.utils.parameters import (
    DOMAIN_LENGTH, T_MAX, U0, F_SOURCE, NX_1D, NX_2D, NX_QUICK, N_STEPS
)
from heatsim.utils.plotting import (
    plot_1d_heatmap, plot_1d_profiles, plot_2d_snapshots, plot_material_grid
)


def build_model(dim, material, L, tmax, u0, f, n):
    """Create the 1D or 2D model for one material."""
    if dim == 1:
        return HeatEquation1D(material, L, tmax, u0, f, n)
    return HeatEquation2D(material, L, tmax, u0, f, n)


def run_group(models, dim, steps=N_STEPS, n_snapshots=10):
    """
    Step all models together, recording snapshots.

    Exactly `steps` steps are taken (fewer if the horizon is reached
    first); a snapshot follows every frame of up to `steps / n_snapshots`
    steps, so the last interval may be shorter.

    Returns
    -------
    t : ndarray of shape (nt,)
    fields : list of ndarray
        Per model: (n, nt) in 1D, (n, n, nt) in 2D, Kelvin.
    """
    stride = max(1, math.ceil(steps / n_snapshots))
    ctrl = PlaybackController(models, dim=dim)

    def snapshot(m):
        return m.get_temperature_2d() if dim == 2 else m.get_temperature().copy()

    times = [models[0].get_time()]
    history = [[snapshot(m)] for m in models]

    taken = 0
    while taken < steps and not ctrl.is_finished():
        ctrl.speed = min(stride, steps - taken)
        rounds = ctrl.advance()
        if rounds == 0:
            break
        taken += rounds
        times.append(models[0].get_time())
        for h, m in zip(history, models):
            h.append(snapshot(m))

    axis = 1 if dim == 1 else 2
    return np.array(times), [np.stack(h, axis=axis) for h in history]


def print_summary(models):
    metrics = compute_all_metrics(models)
    print(f"  {'Material':>12} {'alpha':>10} {'t (s)':>8} {'done':>5} {'T_max (K)':>10} "
          f"{'T_mean (K)':>11} {'dT_max':>8}")
    print("  " + "-" * 70)
    for name, m in metrics.items():
        print(f"  {name:>12} {m['alpha']:>10.3e} {m['time']:>8.2f} {m['progress']:>5.0%} "
              f"{m['T_max']:>10.2f} {m['T_mean']:>11.2f} {m['dT_max']:>8.2f}")
    return metrics


def run_simulation(dim, materials, L, tmax, u0, f, n, steps=N_STEPS,
                   n_snapshots=10, output_dir=None):
    """
    Build, run and plot one simulation group.

    Returns
    -------
    models : list
        The stepped models.
    metrics : dict
        Summary per material.
    """
    sim_name = "1D Bar" if dim == 1 else "2D Plate"
    print("=" * 70)
    print(f"{sim_name}: L={L} m, tmax={tmax} s, u0={u0} C, f={f}, n={n}")
    print("=" * 70)

    models = [build_model(dim, mat, L, tmax, u0, f, n) for mat in materials]
    t, fields = run_group(models, dim, steps=steps, n_snapshots=n_snapshots)
    metrics = print_summary(models)

    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        prefix = f"{dim}d"
        for model, T_field in zip(models, fields):
            tag = model.material.name.lower()
            if dim == 1:
                plot_1d_heatmap(t, model.x, T_field,
                                title=f"1D Bar: {model.material.name}",
                                save_path=output_dir / f"{prefix}_{tag}_heatmap.png")
                picks = np.unique(np.linspace(0, len(t) - 1, 6).astype(int))
                plot_1d_profiles(model.x, T_field[:, picks], t[picks],
                                 title=f"1D Bar: {model.material.name}",
                                 save_path=output_dir / f"{prefix}_{tag}_profiles.png")
            else:
                snaps = list(np.linspace(t[0], t[-1], 4))
                plot_2d_snapshots(model.x, model.y, T_field, snaps, t,
                                  title_prefix=f"2D Plate: {model.material.name}",
                                  save_path=output_dir / f"{prefix}_{tag}_snapshots.png")
        plot_material_grid(models[:4], title=f"{sim_name} - Temperature Rise",
                           save_path=output_dir / f"{prefix}_materials_grid.png")

    return models, metrics


def build_parser():
    parser = argparse.ArgumentParser(
        description="Implicit heat equation simulator (1D bar / 2D plate)")
    parser.add_argument('--dim', type=int, choices=(1, 2), default=1,
                        help='1 = bar, 2 = plate')
    parser.add_argument('--length', type=float, default=DOMAIN_LENGTH,
                        help='Domain length L (m)')
    parser.add_argument('--tmax', type=float, default=T_MAX,
                        help='Simulation horizon (s)')
    parser.add_argument('--u0', type=float, default=U0,
                        help='Initial / boundary temperature (deg C)')
    parser.add_argument('--f', type=float, default=F_SOURCE,
                        help='Source amplitude')
    parser.add_argument('--n', type=int, default=None,
                        help=f'Grid points per axis (default {NX_1D} in 1D, {NX_2D} in 2D)')
    parser.add_argument('--material', default='all',
                        help="Material name or 'all'")
    parser.add_argument('--steps', type=int, default=N_STEPS,
                        help='Stop after this many steps')
    parser.add_argument('--snapshots', type=int, default=10,
                        help='Number of stored snapshots')
    parser.add_argument('--output', default='results',
                        help='Directory for figures')
    parser.add_argument('--quick', action='store_true',
                        help=f'Coarse grid (n={NX_QUICK}) for testing')
    parser.add_argument('--interactive', action='store_true',
                        help='Choose the simulation from a text menu')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.n is not None:
        n = args.n
    elif args.quick:
        n = NX_QUICK
    else:
        n = NX_1D if args.dim == 1 else NX_2D

    if args.interactive:
        def launch(sim_type, params):
            grid_n = args.n or (NX_1D if sim_type == 1 else NX_2D)
            if args.quick and args.n is None:
                grid_n = NX_QUICK
            try:
                run_simulation(sim_type, MATERIALS, params['L'], params['tmax'],
                               params['u0'], params['f'], grid_n,
                               steps=args.steps, n_snapshots=args.snapshots,
                               output_dir=args.output)
            except InvalidDomainParameters as e:
                print(f"Error: {e}")
        run_menu(launch)
        return 0

    if args.material.lower() == 'all':
        materials = MATERIALS
    else:
        try:
            materials = (get_material(args.material),)
        except KeyError as e:
            parser.error(e.args[0])

    try:
        run_simulation(args.dim, materials, args.length, args.tmax, args.u0,
                       args.f, n, steps=args.steps, n_snapshots=args.snapshots,
                       output_dir=args.output)
    except InvalidDomainParameters as e:
        parser.error(str(e))

    print(f"\n✓ Done! Results saved to {args.output}/")
    return 0


if __name__ == '__main__':
    main()
