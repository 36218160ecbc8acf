"""Numerical models: materials, heat sources and the 1D / 2D solvers."""
