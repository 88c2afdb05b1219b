"""Ordered step sequence with coalescing of repeated text and selection steps."""

from __future__ import annotations

from typing import Any

from steppack.core.models import Step
from steppack.core.types import COALESCABLE_KINDS


def coalesces_with_last(steps: tuple[Step, ...], kind: str) -> bool:
    return kind in COALESCABLE_KINDS and bool(steps) and steps[-1].kind == kind


def record_step(steps: tuple[Step, ...], kind: str, payload: Any = None) -> tuple[Step, ...]:
    """Return ``steps`` with a new step appended or merged into the last one.

    Consecutive ``insertText`` payloads concatenate. Consecutive
    ``moveNativeSelection`` steps keep only the newest position. Every other
    kind always appends.
    """
    if not coalesces_with_last(steps, kind):
        return steps + (Step(kind=kind, payload=payload),)

    last = steps[-1]
    if kind == "insertText":
        merged = Step(kind=kind, payload=(last.payload or "") + (payload or ""))
    else:
        merged = Step(kind=kind, payload=payload)
    return steps[:-1] + (merged,)
