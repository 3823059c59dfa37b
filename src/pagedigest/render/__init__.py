"""Incremental rendering of streamed text."""

from pagedigest.render.renderer import IncrementalRenderer

__all__ = ["IncrementalRenderer"]
