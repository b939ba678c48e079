"""Typed serial messaging, relay framing, AD5592R I/O chip control and timer clock selection."""

__version__ = "0.1.0"
__all__ = ["arcom", "arcomve", "ad5592r", "duetimer"]