"""Solarshade command-line interface."""
