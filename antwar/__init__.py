"""Ant colony destruction simulation on directed colony maps."""

__version__ = "0.1.0"
