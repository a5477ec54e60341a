"""CLI command implementations exposed via `streettype.ui.cli`."""

from __future__ import annotations

from .glyph import glyph
from .resolve import resolve


__all__ = ["glyph", "resolve"]
