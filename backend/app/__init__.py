"""Crossover signal bot service (settings, clients, notifiers, API)."""

__version__ = "0.1.0"
