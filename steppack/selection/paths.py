"""Root-relative addressing of DOM selection endpoints.

A path is the sibling index at each level from the editor root down to the
target node. Paths depend only on tree shape, never on node identity, so a
fixture recorded against one editor instance addresses the same positions in
any other instance holding the same markup.
"""

from __future__ import annotations

from steppack.core.models import SelectionSnapshot
from steppack.core.types import Path
from steppack.selection.dom import DomSelection, Node, contains
from steppack.selection.exceptions import SelectionPathError

PLACEHOLDER = "\ufeff"


def resolve_path(node: Node, root: Node) -> Path:
    """Return the sibling-index path from ``root`` down to ``node``.

    ``node`` must descend from ``root``; check with :func:`contains` first.
    """
    path: list[int] = []
    current = node
    while current is not root:
        if current.parent is None:
            raise SelectionPathError(
                f"{node!r} is not a descendant of {root!r}; check containment before resolving."
            )
        path.append(current.index_in_parent())
        current = current.parent
    path.reverse()
    return tuple(path)


def sanitize_selection(selection: DomSelection) -> DomSelection:
    """Zero both offsets when the selection sits inside an empty-text placeholder."""
    anchor = selection.anchor_node
    if (
        anchor is not None
        and anchor is selection.focus_node
        and anchor.text_content == PLACEHOLDER
    ):
        return DomSelection(
            anchor_node=anchor,
            anchor_offset=0,
            focus_node=anchor,
            focus_offset=0,
        )
    return selection


def strip_placeholders(markup: str) -> str:
    return markup.replace(PLACEHOLDER, "")


def snapshot_selection(selection: DomSelection | None, root: Node | None) -> SelectionSnapshot | None:
    """Resolve a live selection into root-relative paths.

    Returns None when an endpoint is missing or lies outside ``root``.
    """
    if root is None or selection is None:
        return None
    if selection.anchor_node is None or selection.focus_node is None:
        return None
    if not contains(root, selection.anchor_node) or not contains(root, selection.focus_node):
        return None

    sanitized = sanitize_selection(selection)
    return SelectionSnapshot(
        anchor_path=resolve_path(sanitized.anchor_node, root),
        anchor_offset=sanitized.anchor_offset,
        focus_path=resolve_path(sanitized.focus_node, root),
        focus_offset=sanitized.focus_offset,
    )
