"""Base exception for the step recorder."""


class RecorderError(Exception):
    """Base class for step recorder errors."""
