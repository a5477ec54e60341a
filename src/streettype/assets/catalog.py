"""Expand characters into numbered variant URLs under class-specific rules."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
import logging

from streettype.assets.constants import (
    ASSET_EXTENSION,
    DEFAULT_MAX_VARIANTS,
    MAX_VARIANTS_LIMIT,
    NUMBERS_FOLDER,
    STYLE_FOLDERS,
    SYMBOLS_FOLDER,
    case_suffix,
    is_digit,
    is_letter,
    is_symbol,
    symbol_name,
    variant_index,
)
from streettype.assets.probe import ExistenceProber
from streettype.assets.resolver import PathResolver, ResolvedBase
from streettype.assets.synth import GlyphSynthesizer
from streettype.core.diagnostics import DiagnosticEmitter, NullEmitter
from streettype.core.exceptions import UnknownStyleError


logger = logging.getLogger(__name__)


class CharacterClass(str, Enum):
    DIGIT = "digit"
    SYMBOL = "symbol"
    LETTER = "letter"
    UNSUPPORTED = "unsupported"


def classify(char: str) -> CharacterClass:
    if is_digit(char):
        return CharacterClass.DIGIT
    if is_letter(char):
        return CharacterClass.LETTER
    if is_symbol(char):
        return CharacterClass.SYMBOL
    return CharacterClass.UNSUPPORTED


def fallback_style(char: str, style: str) -> str:
    """Return the style a synthesized fallback is rendered with.

    Letters carry their case (``sans-upper``); digits and symbols keep the
    base style.
    """
    if is_letter(char):
        return f"{style}-{case_suffix(char)}"
    return style


def style_folder(style: str) -> str:
    folder = STYLE_FOLDERS.get(style)
    if folder is None:
        raise UnknownStyleError(style)
    return folder


@dataclass(frozen=True, slots=True)
class AssetRef:
    """A candidate asset location, tagged when it points at a synthesized glyph."""

    url: str
    synthetic: bool = False


class VariantCatalog:
    """Resolve (character, style, location) into existing variant URLs."""

    def __init__(
        self,
        resolver: PathResolver,
        prober: ExistenceProber,
        *,
        synthesizer: GlyphSynthesizer | None = None,
        max_variants: int = DEFAULT_MAX_VARIANTS,
        extension: str = ASSET_EXTENSION,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.resolver = resolver
        self.prober = prober
        self.synthesizer = synthesizer or GlyphSynthesizer()
        self.max_variants = max_variants
        self.extension = extension
        self.emitter = emitter or NullEmitter()

    def candidate_url(
        self, char: str, style: str, location: str, index: int, resolved: ResolvedBase
    ) -> str | None:
        """Build the URL of one numbered variant, or ``None`` when not addressable."""
        idx = variant_index(index)
        kind = classify(char)
        if kind is CharacterClass.DIGIT:
            return f"{resolved.base_path}{NUMBERS_FOLDER}/{char}/{idx}{self.extension}"
        if kind is CharacterClass.SYMBOL:
            return f"{resolved.base_path}{SYMBOLS_FOLDER}/{symbol_name(char)}/{idx}{self.extension}"
        if kind is CharacterClass.LETTER:
            folder = style_folder(style)
            if resolved.template is None:
                return None
            return resolved.template.render(
                base=resolved.base_path,
                city=location,
                letter=char.upper(),
                style=f"{folder}-{case_suffix(char)}",
                variant=idx,
            )
        return None

    def candidate_urls(
        self, char: str, style: str, location: str, resolved: ResolvedBase, count: int
    ) -> list[str]:
        urls: list[str] = []
        for index in range(1, count + 1):
            url = self.candidate_url(char, style, location, index, resolved)
            if url is not None:
                urls.append(url)
        return urls

    def fallback(self, char: str, style: str, location: str = "NYC") -> AssetRef:
        url = self.synthesizer.generate(char, fallback_style(char, style), city=location)
        return AssetRef(url=url, synthetic=True)

    async def variants(
        self,
        char: str,
        style: str,
        location: str,
        *,
        max_variants: int | None = None,
        skip_fallback: bool = False,
    ) -> tuple[AssetRef, ...]:
        """Return existing variants in index order, or a single synthesized fallback.

        With ``skip_fallback`` an empty tuple signals that no real asset exists.
        """
        count = max(1, min(max_variants or self.max_variants, MAX_VARIANTS_LIMIT))
        resolved = await self.resolver.resolve()

        urls: list[str] = []
        if resolved.detected:
            try:
                urls = self.candidate_urls(char, style, location, resolved, count)
            except UnknownStyleError as exc:
                self.emitter.error(str(exc))
                urls = []
        elif is_letter(char) and style not in STYLE_FOLDERS:
            self.emitter.error(str(UnknownStyleError(style)))

        found: list[AssetRef] = []
        if urls:
            results = await asyncio.gather(*(self.prober.exists(url) for url in urls))
            found = [AssetRef(url=url) for url, exists in zip(urls, results) if exists]

        if not found and not skip_fallback:
            logger.debug("No variants found for %r (%s), using fallback", char, style)
            found.append(self.fallback(char, style, location))
        return tuple(found)


__all__ = [
    "AssetRef",
    "CharacterClass",
    "VariantCatalog",
    "classify",
    "fallback_style",
    "style_folder",
]
