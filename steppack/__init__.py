"""Implementation packages for the stepkit editor step recorder."""

__version__ = "0.1.0"
