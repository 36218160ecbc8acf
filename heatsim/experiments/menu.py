"""
Text menu for choosing a simulation and entering its parameters.

Reading and printing go through injectable callables so the menu can be
driven from tests.
"""

from heatsim.utils.parameters import DOMAIN_LENGTH, T_MAX, U0, F_SOURCE

SIM_NAMES = {1: "1D Bar", 2: "2D Plate"}

# (key, prompt, unit)
PARAMETER_PROMPTS = [
    ('L', "Domain length L", "m"),
    ('tmax', "Max time tmax", "s"),
    ('u0', "Initial temp u0", "C"),
    ('f', "Source amplitude f", "C"),
]


def default_parameters():
    return {'L': DOMAIN_LENGTH, 'tmax': T_MAX, 'u0': U0, 'f': F_SOURCE}


def print_header(out=print):
    out("")
    out("=" * 40)
    out("   HEAT EQUATION SIMULATOR")
    out("=" * 40)
    out("")


def select_simulation_type(read=input, out=print):
    """
    Ask for 1D / 2D / quit.

    Returns
    -------
    int
        1, 2, 0 (quit) or -1 for unparsable input.
    """
    out("SELECT SIMULATION TYPE")
    out("-" * 22)
    out("  1. 1D Bar  (All 4 Materials - 2x2 Grid)")
    out("  2. 2D Plate (All 4 Materials - 2x2 Grid)")
    out("  0. Quit")
    try:
        return int(read("Choice: ").strip())
    except ValueError:
        return -1


def get_parameters(read=input, out=print, defaults=None):
    """
    Prompt for L, tmax, u0 and f.

    Enter keeps the default, 'b' goes back, anything unparsable falls back
    to the default value.

    Returns
    -------
    dict or None
        None if the user chose to go back.
    """
    params = dict(defaults or default_parameters())
    fallback = default_parameters()

    out("")
    out("PARAMETERS (Enter for default, 'b' to go back)")
    out("-" * 46)
    for key, label, unit in PARAMETER_PROMPTS:
        text = read(f"{label} [{params[key]}] {unit}: ").strip()
        if text.lower() == 'b':
            return None
        if not text:
            continue
        try:
            params[key] = float(text)
        except ValueError:
            params[key] = fallback[key]
    return params


def confirm(sim_type, params, read=input, out=print):
    """Show the configuration; True if the user answers 's' (start)."""
    out("")
    out("CONFIGURATION (2x2 Grid - All Materials)")
    out("-" * 40)
    out(f"  Type:      {SIM_NAMES[sim_type]}")
    out("  Materials: Copper, Iron, Glass, Polystyrene")
    out(f"  L={params['L']} m, tmax={params['tmax']} s")
    out(f"  u0={params['u0']} C, f={params['f']} C")
    out("")
    answer = read("[S]tart  [B]ack  [Q]uit: ").strip().lower()
    return answer[:1] == 's'


def run_menu(launch, read=input, out=print):
    """
    Menu loop: choose, configure, confirm, launch; repeat until quit.

    Parameters
    ----------
    launch : callable(sim_type, params)
        Runs the chosen simulation.

    Returns
    -------
    int
        Number of simulations launched.
    """
    launched = 0
    while True:
        print_header(out)
        sim_type = select_simulation_type(read, out)
        if sim_type == 0:
            out("\nExit.")
            return launched
        if sim_type not in SIM_NAMES:
            out("\nInvalid choice.")
            continue

        params = get_parameters(read, out)
        if params is None:
            continue
        if not confirm(sim_type, params, read, out):
            continue

        out("\nStarting grid simulation...")
        launch(sim_type, params)
        launched += 1
        out("\nReturning to menu...")
