"""Selection subsystem exceptions."""

from steppack.exceptions import RecorderError


class SelectionPathError(RecorderError):
    """Raised when a node is resolved against a root it does not descend from."""
