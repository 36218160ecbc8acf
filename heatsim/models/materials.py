"""
Material properties for heat conduction.

    alpha = lambda / (rho * c)

where lambda is the thermal conductivity (W/(m K)), rho the density
(kg/m^3) and c the specific heat capacity (J/(kg K)).

The four presets are the materials compared side by side in the
simulator: a good conductor (copper), a metal (iron), and two insulators
(glass, polystyrene).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Material:
    """
    Physical properties of a material used in heat simulations.

    Parameters
    ----------
    name : str
        Display label.
    lam : float
        Thermal conductivity (W/(m K)).
    rho : float
        Density (kg/m^3).
    c : float
        Specific heat capacity (J/(kg K)).
    """
    name: str
    lam: float
    rho: float
    c: float

    def alpha(self):
        """Thermal diffusivity (m^2/s)."""
        return self.lam / self.volumetric_heat_capacity

    @property
    def volumetric_heat_capacity(self):
        """rho * c (J/(m^3 K))."""
        return self.rho * self.c


COPPER = Material("Copper", 389.0, 8940.0, 380.0)
IRON = Material("Iron", 80.2, 7874.0, 440.0)
GLASS = Material("Glass", 1.2, 2530.0, 840.0)
POLYSTYRENE = Material("Polystyrene", 0.1, 1040.0, 1200.0)

# Display order of the 2x2 comparison grid
MATERIALS = (COPPER, IRON, GLASS, POLYSTYRENE)


def get_material(name):
    """Look up a preset by name (case-insensitive)."""
    for mat in MATERIALS:
        if mat.name.lower() == name.strip().lower():
            return mat
    known = ", ".join(m.name for m in MATERIALS)
    raise KeyError(f"Unknown material {name!r}. Known materials: {known}")
