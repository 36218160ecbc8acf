"""Runnable scripts: command-line runner and text menu."""
