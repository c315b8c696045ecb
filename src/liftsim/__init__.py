"""Interactive aerodynamic-lift simulator with altitude hold, autoland and auto-mission modes."""

__version__ = "0.1.0"
