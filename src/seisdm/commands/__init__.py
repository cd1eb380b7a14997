"""Seisdm CLI subcommands."""
