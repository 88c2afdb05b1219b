"""DOM model and selection path resolution."""

from steppack.selection.dom import DomSelection, Element, Node, Text, contains
from steppack.selection.exceptions import SelectionPathError
from steppack.selection.paths import (
    PLACEHOLDER,
    resolve_path,
    sanitize_selection,
    snapshot_selection,
    strip_placeholders,
)

__all__ = [
    "PLACEHOLDER",
    "DomSelection",
    "Element",
    "Node",
    "SelectionPathError",
    "Text",
    "contains",
    "resolve_path",
    "sanitize_selection",
    "snapshot_selection",
    "strip_placeholders",
]
