"""Driver-side controllers deciding when the solvers are stepped."""
