"""planeflap: a small side-scrolling plane game."""

__version__ = "0.1.0"
