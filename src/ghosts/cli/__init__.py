"""Command-line entry points for ghosts."""
