"""Solarprognose forecast provider plugin for the Solarreader host."""

__version__ = "1.0.1"
