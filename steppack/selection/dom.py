"""Minimal DOM tree used for selection addressing and markup snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from html import escape


class Node(ABC):
    """Base DOM node with a parent link and ordered children."""

    __slots__ = ("parent", "children")

    def __init__(self) -> None:
        self.parent: Element | None = None
        self.children: list[Node] = []

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    def index_in_parent(self) -> int:
        if self.parent is None:
            raise ValueError("Detached node has no sibling index.")
        # Identity lookup: structurally equal siblings must not alias.
        for index, sibling in enumerate(self.parent.children):
            if sibling is self:
                return index
        raise ValueError("Node is not listed among its parent's children.")

    @abstractmethod
    def serialize(self) -> str:
        """Markup for this node and its subtree."""


class Text(Node):
    __slots__ = ("data",)

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    @property
    def text_content(self) -> str:
        return self.data

    def serialize(self) -> str:
        return escape(self.data, quote=False)

    def __repr__(self) -> str:
        return f"Text({self.data!r})"


class Element(Node):
    __slots__ = ("tag", "attributes")

    def __init__(self, tag: str, attributes: dict[str, str] | None = None) -> None:
        super().__init__()
        self.tag = tag
        self.attributes = dict(attributes or {})

    def append(self, *nodes: Node) -> "Element":
        for node in nodes:
            if node.parent is not None:
                node.parent.children.remove(node)
            node.parent = self
            self.children.append(node)
        return self

    def clear(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    @property
    def inner_html(self) -> str:
        return "".join(child.serialize() for child in self.children)

    def serialize(self) -> str:
        attrs = "".join(
            f' {name}="{escape(value, quote=True)}"' for name, value in self.attributes.items()
        )
        return f"<{self.tag}{attrs}>{self.inner_html}</{self.tag}>"

    def __repr__(self) -> str:
        return f"Element({self.tag!r})"


def contains(root: Node, node: Node | None) -> bool:
    """Return True when ``node`` is ``root`` or one of its descendants."""
    current = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False


@dataclass(frozen=True, slots=True)
class DomSelection:
    """Platform selection endpoints; either node may be missing."""

    anchor_node: Node | None
    anchor_offset: int
    focus_node: Node | None
    focus_offset: int

    @classmethod
    def collapsed(cls, node: Node | None, offset: int) -> "DomSelection":
        return cls(anchor_node=node, anchor_offset=offset, focus_node=node, focus_offset=offset)
