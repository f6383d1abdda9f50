"""Evolutionary search over Game-of-Life seed configurations."""

__version__ = "0.1.0"
