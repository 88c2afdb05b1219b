"""Core models and step vocabulary."""

from steppack.core.models import SelectionSnapshot, Step
from steppack.core.types import (
    ACTION_KINDS,
    COALESCABLE_KINDS,
    NAVIGATION_KINDS,
    ActionKind,
    Path,
)

__all__ = [
    "ACTION_KINDS",
    "COALESCABLE_KINDS",
    "NAVIGATION_KINDS",
    "ActionKind",
    "Path",
    "SelectionSnapshot",
    "Step",
]
