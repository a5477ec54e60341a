"""Turn text into an ordered sequence of renderable letter descriptors."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import Any

from streettype.assets.catalog import CharacterClass, classify, fallback_style
from streettype.assets.loader import GlyphResource
from streettype.context import AssetContext
from streettype.core.config import TypographyConfig


logger = logging.getLogger(__name__)

RANDOM_STYLE = "random"
PREWARM_LETTERS = "ABET" + "abet"
PREWARM_STYLE = "sans"


class LetterKind(str, Enum):
    LETTER = "letter"
    SPACE = "space"
    SPECIAL = "special"


@dataclass(frozen=True, slots=True)
class LetterDescriptor:
    """How to render one character of the (case-transformed) input."""

    kind: LetterKind
    character: str
    style: str | None = None
    resource: GlyphResource | None = None
    source: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.resource is not None and self.resource.is_fallback

    @property
    def is_synthesized(self) -> bool:
        return self.resource is not None and self.resource.is_synthesized

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind.value,
            "character": self.character,
            "style": self.style,
            "source": self.source,
            "is_fallback": self.is_fallback,
        }
        if self.resource is not None:
            payload["width"] = self.resource.width
            payload["height"] = self.resource.height
            payload["is_synthesized"] = self.resource.is_synthesized
        return payload


def apply_case(text: str, case_option: str) -> str:
    """Apply the ``upper``/``lower``/``mixed`` case option to the whole string."""
    if case_option == "upper":
        return text.upper()
    if case_option == "lower":
        return text.lower()
    return text


class TypographyManager:
    """Resolve text through the catalog and cache of an :class:`AssetContext`.

    Characters are resolved concurrently; the returned list is keyed to
    input positions, so its order never depends on completion order. A failure
    while resolving one character only replaces that character with its
    synthesized glyph.
    """

    def __init__(
        self,
        context: AssetContext,
        *,
        config: TypographyConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.context = context
        self.config = config or TypographyConfig()
        self.rng = rng or random.Random()
        self._background: set[asyncio.Future[Any]] = set()
        self._prewarmed = False

    async def initialize(self) -> bool:
        """Run (or join) layout detection; return whether real assets were found."""
        resolved = await self.context.resolver.resolve()
        if self.config.prewarm and not self._prewarmed:
            self.prewarm()
        return resolved.detected

    def random_style(self) -> str:
        return self.rng.choice(list(self.config.available_styles))

    async def resolve_text(
        self,
        text: str,
        *,
        style: str | None = None,
        city: str | None = None,
        case_option: str | None = None,
    ) -> list[LetterDescriptor]:
        """Return one descriptor per character of the case-transformed ``text``."""
        style = style or self.config.style
        city = city or self.config.city
        processed = apply_case(text or "", case_option or self.config.case_option)
        await self.initialize()

        # Random draws happen in input order so a seeded rng pins the outcome.
        jobs = []
        for char in processed:
            if char.isspace():
                jobs.append(_ready(LetterDescriptor(kind=LetterKind.SPACE, character=char)))
                continue
            kind = classify(char)
            if kind is CharacterClass.UNSUPPORTED:
                jobs.append(_ready(LetterDescriptor(kind=LetterKind.SPECIAL, character=char)))
                continue
            char_style = self.random_style() if style == RANDOM_STYLE else style
            draw = self.rng.random()
            jobs.append(self._resolve_character(char, char_style, city, draw))

        letters = list(await asyncio.gather(*jobs))
        fallbacks = sum(1 for letter in letters if letter.is_fallback)
        self.context.emitter.event("text_resolved", {"count": len(letters), "fallbacks": fallbacks})
        return letters

    async def _resolve_character(
        self, char: str, style: str, city: str, draw: float
    ) -> LetterDescriptor:
        kind = LetterKind.LETTER
        if classify(char) is CharacterClass.SYMBOL:
            kind = LetterKind.SPECIAL
        try:
            variants = await self.context.catalog.variants(char, style, city)
            if not variants:
                logger.debug("No variants found for %r, using placeholder", char)
                return await self._fallback(char, style, city, kind)
            ref = variants[min(int(draw * len(variants)), len(variants) - 1)]
            resource = await self.context.cache.load(ref)
        except Exception as exc:
            self.context.emitter.warning(f"Error resolving letter {char!r}; using fallback.", exc)
            return await self._fallback(char, style, city, kind)

        if resource.is_placeholder:
            logger.debug("Invalid image for %r, using placeholder", char)
            return await self._fallback(char, style, city, kind)
        return LetterDescriptor(
            kind=kind,
            character=char,
            style=fallback_style(char, style),
            resource=resource,
            source=ref.url,
        )

    async def _fallback(
        self, char: str, style: str, city: str, kind: LetterKind
    ) -> LetterDescriptor:
        ref = self.context.catalog.fallback(char, style, city)
        resource = await self.context.cache.load(ref)
        return LetterDescriptor(
            kind=kind,
            character=char,
            style=fallback_style(char, style),
            resource=resource,
            source=ref.url,
        )

    def prewarm(
        self,
        letters: Iterable[str] = PREWARM_LETTERS,
        *,
        style: str = PREWARM_STYLE,
        city: str | None = None,
    ) -> asyncio.Future[None]:
        """Queue background loads for common letters; failures are ignored."""
        self._prewarmed = True
        task = asyncio.ensure_future(self._prewarm(tuple(letters), style, city or self.config.city))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def _prewarm(self, letters: Sequence[str], style: str, city: str) -> None:
        for char in letters:
            try:
                variants = await self.context.catalog.variants(char, style, city, skip_fallback=True)
                if variants:
                    await self.context.cache.load(variants[0])
            except Exception as exc:  # prewarming is best effort
                logger.debug("Prewarm of %r failed: %s", char, exc)

    async def discover_style(
        self, char: str, city: str | None = None, styles: Iterable[str] | None = None
    ) -> str | None:
        """Return the first style, in random order, backed by a real asset."""
        order = list(styles or self.config.available_styles)
        self.rng.shuffle(order)
        for candidate in order:
            variants = await self.context.catalog.variants(
                char, candidate, city or self.config.city, skip_fallback=True
            )
            if any(not ref.synthetic for ref in variants):
                return candidate
        return None

    def get_stats(self) -> dict[str, Any]:
        """Return a read-only diagnostic snapshot."""
        resolved = self.context.resolver.resolved
        stats: dict[str, Any] = self.context.stats.snapshot()
        stats.update(
            {
                "cache_size": self.context.cache.size,
                "pending_loads": self.context.cache.pending,
                "base_path": resolved.base_path if resolved else None,
                "resolved_template": (
                    resolved.template.pattern if resolved and resolved.template else None
                ),
                "detection_complete": self.context.resolver.complete,
                "assets_detected": bool(resolved and resolved.detected),
            }
        )
        return stats


async def _ready(descriptor: LetterDescriptor) -> LetterDescriptor:
    return descriptor


__all__ = [
    "PREWARM_LETTERS",
    "RANDOM_STYLE",
    "LetterDescriptor",
    "LetterKind",
    "TypographyManager",
    "apply_case",
]
