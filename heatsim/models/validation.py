"""Construction-time checks shared by the 1D and 2D models."""

import math
import numbers


class InvalidDomainParameters(ValueError):
    """Raised when a solver is built from an unusable configuration."""


def validate_domain(material, L, tmax, u0, f, n):
    """
    Reject configurations that would divide by zero or produce NaN/Inf.

    Raises
    ------
    InvalidDomainParameters
        If n < 2, L <= 0, tmax <= 0, rho * c == 0, or any input is not finite.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidDomainParameters(f"n must be an integer, got {n!r}")
    if n < 2:
        raise InvalidDomainParameters(f"n must be >= 2, got {n}")

    for label, value in (("L", L), ("tmax", tmax), ("u0", u0), ("f", f)):
        if not math.isfinite(value):
            raise InvalidDomainParameters(f"{label} must be finite, got {value!r}")

    if L <= 0:
        raise InvalidDomainParameters(f"L must be > 0, got {L}")
    if tmax <= 0:
        raise InvalidDomainParameters(f"tmax must be > 0, got {tmax}")

    rho_c = material.volumetric_heat_capacity
    if rho_c == 0 or not math.isfinite(rho_c):
        raise InvalidDomainParameters(
            f"rho * c must be non-zero and finite for {material.name!r}, "
            f"got rho={material.rho}, c={material.c}"
        )
    if not math.isfinite(material.lam):
        raise InvalidDomainParameters(
            f"lambda must be finite for {material.name!r}, got {material.lam}"
        )
