"""Synthesized SVG letterforms used when no real asset is available."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote, unquote
from xml.sax.saxutils import escape

from streettype.assets.constants import base_style, is_digit, is_symbol


SVG_DATA_PREFIX = "data:image/svg+xml;charset=utf-8,"
GLYPH_WIDTH = 40
GLYPH_HEIGHT = 60


@dataclass(frozen=True, slots=True)
class GlyphPalette:
    fill: str
    background: str
    stroke: str


_DEFAULT_PALETTE = GlyphPalette(fill="#333", background="#f0f0f0", stroke="#ccc")

STYLE_PALETTES: dict[str, GlyphPalette] = {
    "sans": GlyphPalette(fill="#3a7ca5", background="#f0f8ff", stroke="#2a5a7a"),
    "serif": GlyphPalette(fill="#d63030", background="#fff0f0", stroke="#a02020"),
    "mono": GlyphPalette(fill="#2d882d", background="#f0fff0", stroke="#1d681d"),
    "script": GlyphPalette(fill="#aa7c39", background="#fff8e6", stroke="#8a5c19"),
    "decorative": GlyphPalette(fill="#9933cc", background="#f8f0ff", stroke="#7922aa"),
}
DIGIT_PALETTE = GlyphPalette(fill="#6a5acd", background="#f5f0ff", stroke="#483d8b")
SYMBOL_PALETTE = GlyphPalette(fill="#ff8c00", background="#fff8f0", stroke="#cc7000")

FONT_FAMILIES: dict[str, str] = {
    "sans": "Arial, Helvetica, sans-serif",
    "serif": "Georgia, 'Times New Roman', serif",
    "mono": "'Courier New', Courier, monospace",
    "script": "'Comic Sans MS', cursive, sans-serif",
    "decorative": "Impact, fantasy",
}
DEFAULT_FONT_FAMILY = "sans-serif"


def font_family(style: str) -> str:
    """Return the system font stack matching a style (case suffix ignored)."""
    return FONT_FAMILIES.get(base_style(style), DEFAULT_FONT_FAMILY)


def palette_for(char: str, style: str) -> GlyphPalette:
    if is_digit(char):
        return DIGIT_PALETTE
    if is_symbol(char):
        return SYMBOL_PALETTE
    return STYLE_PALETTES.get(base_style(style), _DEFAULT_PALETTE)


def render_glyph_svg(char: str, style: str) -> str:
    """Return the SVG markup of a fallback glyph.

    The filter id only has to be unique per character within a page, so it is
    derived from the code point and the output stays byte-identical.
    """
    palette = palette_for(char, style)
    family = escape(font_family(style), {"'": "&apos;"})
    filter_id = "shadow_" + "_".join(f"{ord(c):x}" for c in char)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{GLYPH_WIDTH}" '
        f'height="{GLYPH_HEIGHT}" viewBox="0 0 {GLYPH_WIDTH} {GLYPH_HEIGHT}" '
        'preserveAspectRatio="xMidYMid meet">'
        f'<defs><filter id="{filter_id}">'
        '<feDropShadow dx="1" dy="1" stdDeviation="1" flood-opacity="0.3"/>'
        "</filter></defs>"
        f'<rect width="{GLYPH_WIDTH}" height="{GLYPH_HEIGHT}" fill="{palette.background}" '
        f'stroke="{palette.stroke}" stroke-width="1"/>'
        f'<text x="{GLYPH_WIDTH // 2}" y="35" font-family="{family}" font-size="30" '
        f'fill="{palette.fill}" text-anchor="middle" dominant-baseline="middle" '
        f'filter="url(#{filter_id})">{escape(char)}</text>'
        "</svg>"
    )


def synthesize_glyph(char: str, style: str) -> str:
    """Return a self-contained ``data:`` URL for the fallback glyph of ``char``."""
    return SVG_DATA_PREFIX + quote(render_glyph_svg(char, style), safe="")


def is_synthetic_url(url: str) -> bool:
    return url.startswith("data:")


def decode_glyph_url(url: str) -> str:
    """Return the SVG markup embedded in a synthesized glyph URL."""
    if not url.startswith(SVG_DATA_PREFIX):
        raise ValueError("not a synthesized glyph URL")
    return unquote(url[len(SVG_DATA_PREFIX) :])


@dataclass(slots=True)
class GlyphSynthesizer:
    """Memoising front-end over :func:`synthesize_glyph`."""

    generated: int = 0
    cached: int = 0
    _cache: dict[tuple[str, str, str, str], str] = field(default_factory=dict, repr=False)

    def generate(self, char: str, style: str, *, variant: str = "01", city: str = "NYC") -> str:
        key = (char, style, variant, city)
        url = self._cache.get(key)
        if url is not None:
            self.cached += 1
            return url
        url = synthesize_glyph(char, style)
        self._cache[key] = url
        self.generated += 1
        return url

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def stats(self) -> dict[str, int]:
        return {"generated": self.generated, "cached": self.cached, "cache_size": self.cache_size}


__all__ = [
    "DIGIT_PALETTE",
    "FONT_FAMILIES",
    "GLYPH_HEIGHT",
    "GLYPH_WIDTH",
    "STYLE_PALETTES",
    "SVG_DATA_PREFIX",
    "SYMBOL_PALETTE",
    "GlyphPalette",
    "GlyphSynthesizer",
    "decode_glyph_url",
    "font_family",
    "is_synthetic_url",
    "palette_for",
    "render_glyph_svg",
    "synthesize_glyph",
]
