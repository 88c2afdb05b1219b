"""Fixture text rendering."""

from steppack.fixture.serializer import render_fixture, render_payload, render_step

__all__ = ["render_fixture", "render_payload", "render_step"]
