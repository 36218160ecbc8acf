"""Implicit finite-difference heat equation simulator (1D bar, 2D plate)."""

__version__ = "0.1.0"
