"""Gravitational orbit sandbox: headless physics and orbit prediction."""

__version__ = "0.8.0"
