"""Command line interface for slashterm."""
