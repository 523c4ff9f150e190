"""AI component generator for the Angular playground editor."""

__version__ = "0.1.0"
