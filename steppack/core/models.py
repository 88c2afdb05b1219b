"""Core data models for recorded steps and selection snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from steppack.core.types import ACTION_KINDS, Path


@dataclass(frozen=True, slots=True)
class Step:
    """A single recorded symbolic action plus its optional payload."""

    kind: str
    payload: Any = None

    def __post_init__(self) -> None:
        if self.kind not in ACTION_KINDS:
            raise ValueError(f"Unsupported step kind: {self.kind}")

    def to_dict(self) -> dict[str, Any]:
        payload = self.payload
        if isinstance(payload, tuple):
            payload = [list(item) if isinstance(item, tuple) else item for item in payload]
        return {"kind": self.kind, "payload": payload}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Step":
        payload = raw.get("payload")
        if isinstance(payload, list):
            payload = tuple(tuple(item) if isinstance(item, list) else item for item in payload)
        return cls(kind=raw["kind"], payload=payload)


@dataclass(frozen=True, slots=True)
class SelectionSnapshot:
    """Root-relative anchor/focus positions of a live selection."""

    anchor_path: Path
    anchor_offset: int
    focus_path: Path
    focus_offset: int

    def as_payload(self) -> tuple[Path, int, Path, int]:
        return (self.anchor_path, self.anchor_offset, self.focus_path, self.focus_offset)

    def to_dict(self) -> dict[str, Any]:
        return {
            "anchor_path": list(self.anchor_path),
            "anchor_offset": self.anchor_offset,
            "focus_path": list(self.focus_path),
            "focus_offset": self.focus_offset,
        }
