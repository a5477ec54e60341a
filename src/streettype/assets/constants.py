"""Shared constants and helpers for letterform asset naming."""

from __future__ import annotations

import string


ASSET_EXTENSION = ".jpg"

DEFAULT_BASE_PATHS: tuple[str, ...] = (
    "",
    "assets/",
    "/assets/",
    "./assets/",
    "../assets/",
    "images/",
    "/images/",
    "./images/",
    "fonts/",
    "/fonts/",
    "./fonts/",
    "letters/",
    "/letters/",
    "./letters/",
)

DEFAULT_TEMPLATES: tuple[str, ...] = (
    "{base}{city}/alphabet/{letter}/{style}/{variant}.jpg",
    "{base}cities/{city}/alphabet/{letter}/{style}/{variant}.jpg",
    "{base}alphabet/{city}/{letter}/{style}/{variant}.jpg",
    "{base}{letter}/{style}/{variant}.jpg",
    "{base}{style}/{letter}/{variant}.jpg",
    "{base}{letter}_{style}_{variant}.jpg",
)

# Reduced candidate lists used when the asset host is local.
LOCAL_BASE_PATHS: tuple[str, ...] = ("assets/",)
LOCAL_TEMPLATES: tuple[str, ...] = (
    "{base}alphabet/{city}/{letter}/{style}/{variant}.jpg",
    "{base}letters/{letter}/{style}/{variant}.jpg",
)

FALLBACK_BASE_PATH = "assets/"

PROBE_SAMPLE: dict[str, str] = {
    "city": "NYC",
    "letter": "A",
    "style": "sans-upper",
    "variant": "01",
}

STYLE_FOLDERS: dict[str, str] = {
    "sans": "sans",
    "serif": "serif",
    "mono": "monospace",
    "script": "script",
    "decorative": "decorative",
    "random": "sans",
}

AVAILABLE_STYLES: tuple[str, ...] = ("sans", "serif", "mono", "script", "decorative")

NUMBERS_FOLDER = "Numbers"
SYMBOLS_FOLDER = "Symbols"

SYMBOL_NAMES: dict[str, str] = {
    "!": "exclamation",
    "?": "question",
    ".": "period",
    ",": "comma",
    ":": "colon",
    ";": "semicolon",
    '"': "quote",
    "'": "apostrophe",
    "(": "parenthesis-open",
    ")": "parenthesis-close",
    "[": "bracket-open",
    "]": "bracket-close",
    "{": "brace-open",
    "}": "brace-close",
    "<": "angle-open",
    ">": "angle-close",
    "+": "plus",
    "-": "minus",
    "*": "asterisk",
    "/": "slash",
    "\\": "backslash",
    "|": "vertical-bar",
    "=": "equals",
    "@": "at",
    "#": "hash",
    "$": "dollar",
    "%": "percent",
    "^": "caret",
    "&": "ampersand",
    "_": "underscore",
}

DEFAULT_SYMBOL_NAME = "symbol"

# Characters carrying their own asset folder; anything else is passed through.
SYMBOL_CHARACTERS = frozenset(SYMBOL_NAMES) | frozenset(string.punctuation)

MAX_VARIANTS_LIMIT = 5
DEFAULT_MAX_VARIANTS = 3


def is_digit(char: str) -> bool:
    return len(char) == 1 and char in string.digits


def is_letter(char: str) -> bool:
    return len(char) == 1 and char in string.ascii_letters


def is_symbol(char: str) -> bool:
    return len(char) == 1 and char in SYMBOL_CHARACTERS


def symbol_name(char: str) -> str:
    """Return the folder name used for a punctuation character."""
    return SYMBOL_NAMES.get(char, DEFAULT_SYMBOL_NAME)


def case_suffix(char: str) -> str:
    """Return ``upper`` or ``lower`` depending on the character case."""
    return "upper" if char == char.upper() else "lower"


def base_style(style: str) -> str:
    """Strip the ``-upper``/``-lower`` suffix from a style name."""
    if style.endswith(("-upper", "-lower")):
        return style.rsplit("-", 1)[0]
    return style


def variant_index(index: int) -> str:
    """Format a 1-based variant index as a zero-padded two-digit string."""
    return f"{index:02d}"


__all__ = [
    "ASSET_EXTENSION",
    "AVAILABLE_STYLES",
    "DEFAULT_BASE_PATHS",
    "DEFAULT_MAX_VARIANTS",
    "DEFAULT_SYMBOL_NAME",
    "DEFAULT_TEMPLATES",
    "FALLBACK_BASE_PATH",
    "LOCAL_BASE_PATHS",
    "LOCAL_TEMPLATES",
    "MAX_VARIANTS_LIMIT",
    "NUMBERS_FOLDER",
    "PROBE_SAMPLE",
    "STYLE_FOLDERS",
    "SYMBOLS_FOLDER",
    "SYMBOL_CHARACTERS",
    "SYMBOL_NAMES",
    "base_style",
    "case_suffix",
    "is_digit",
    "is_letter",
    "is_symbol",
    "symbol_name",
    "variant_index",
]
