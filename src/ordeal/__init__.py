"""Wilderness Ordeal: a turn-based survival decision simulation."""

__version__ = "0.3.0"
