"""Polariton band structure of an electron in a periodic potential coupled to a cavity photon mode."""

__version__ = "0.1.0"