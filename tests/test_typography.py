from __future__ import annotations

import asyncio
import random

from streettype.assets.constants import AVAILABLE_STYLES, base_style
from streettype.context import AssetContext
from streettype.core.config import AssetConfig, TypographyConfig
from streettype.typography import LetterKind, TypographyManager, apply_case


TEMPLATE = "{base}{letter}/{style}/{variant}.jpg"
PROBE_URL = "a/A/sans-upper/01.jpg"


def _manager(loader, emitter, *, seed: int = 0, **typography) -> TypographyManager:
    config = AssetConfig(base_paths=["a/"], templates=[TEMPLATE], max_variants=2)
    context = AssetContext.create(loader, config=config, emitter=emitter)
    return TypographyManager(
        context, config=TypographyConfig(**typography), rng=random.Random(seed)
    )


def test_apply_case() -> None:
    assert apply_case("Hi there", "upper") == "HI THERE"
    assert apply_case("Hi there", "lower") == "hi there"
    assert apply_case("Hi there", "mixed") == "Hi there"


def test_unreachable_assets_yield_fallbacks(fake_loader, emitter) -> None:
    manager = _manager(fake_loader(), emitter)

    letters = asyncio.run(manager.resolve_text("A1!", style="sans", city="NYC"))

    assert [letter.character for letter in letters] == ["A", "1", "!"]
    assert all(letter.is_fallback for letter in letters)
    assert [letter.style for letter in letters] == ["sans-upper", "sans", "sans"]
    assert [letter.kind for letter in letters] == [
        LetterKind.LETTER,
        LetterKind.LETTER,
        LetterKind.SPECIAL,
    ]
    assert emitter.named("text_resolved") == [{"count": 3, "fallbacks": 3}]


def test_case_is_applied_before_resolution(fake_loader, emitter) -> None:
    manager = _manager(fake_loader(), emitter)

    letters = asyncio.run(manager.resolve_text("Hi there", case_option="upper"))

    assert "".join(letter.character for letter in letters) == "HI THERE"
    spaces = [i for i, letter in enumerate(letters) if letter.kind is LetterKind.SPACE]
    assert spaces == [2]
    assert letters[2].resource is None


def test_output_preserves_input_order(fake_loader, emitter) -> None:
    loader = fake_loader({PROBE_URL, "a/B/sans-lower/01.jpg"}, delay=0.001)
    manager = _manager(loader, emitter)
    text = "bAzA b9é?"

    letters = asyncio.run(manager.resolve_text(text, style="sans"))

    assert "".join(letter.character for letter in letters) == text
    assert letters[0].source == "a/B/sans-lower/01.jpg"
    assert letters[1].source == PROBE_URL
    assert letters[1].resource is letters[3].resource
    assert letters[2].is_synthesized
    assert letters[7].kind is LetterKind.SPECIAL and letters[7].resource is None


def test_real_asset_is_used_when_present(fake_loader, emitter) -> None:
    manager = _manager(fake_loader({PROBE_URL}), emitter)

    (letter,) = asyncio.run(manager.resolve_text("A", style="sans"))

    assert letter.kind is LetterKind.LETTER
    assert not letter.is_fallback
    assert letter.style == "sans-upper"
    assert (letter.resource.width, letter.resource.height) == (120, 180)
    assert letter.to_dict()["source"] == PROBE_URL


def test_failed_load_is_replaced_by_synthesized_glyph(fake_loader, emitter) -> None:
    loader = fake_loader({PROBE_URL}, flaky={PROBE_URL})
    manager = _manager(loader, emitter)

    (letter,) = asyncio.run(manager.resolve_text("A", style="sans"))

    assert letter.is_fallback and letter.is_synthesized
    assert letter.style == "sans-upper"
    assert manager.context.stats.failed == 1


def test_detection_runs_once_across_calls(fake_loader, emitter) -> None:
    manager = _manager(fake_loader({PROBE_URL}), emitter)

    async def run() -> None:
        for text in ("ABC", "abc", "A1!", "zzz"):
            await manager.resolve_text(text)

    asyncio.run(run())

    assert manager.context.resolver.attempts == 1
    assert len(emitter.named("asset_detected")) == 1


def test_unknown_style_yields_fallback(fake_loader, emitter) -> None:
    manager = _manager(fake_loader({PROBE_URL}), emitter)

    (letter,) = asyncio.run(manager.resolve_text("A", style="gothic"))

    assert letter.is_fallback and letter.is_synthesized
    assert letter.style == "gothic-upper"
    assert emitter.errors == [("Unknown style key: gothic", None)]


def test_random_style_draws_per_character(fake_loader, emitter) -> None:
    def styles(seed: int) -> list[str]:
        manager = _manager(fake_loader(), emitter, seed=seed)
        letters = asyncio.run(manager.resolve_text("ABCDEFGH", style="random"))
        return [letter.style for letter in letters]

    drawn = styles(3)

    assert drawn == styles(3)
    assert all(base_style(style) in AVAILABLE_STYLES for style in drawn)
    assert all(style.endswith("-upper") for style in drawn)


def test_discover_style_finds_backed_style(fake_loader, emitter) -> None:
    manager = _manager(fake_loader({PROBE_URL, "a/B/serif-upper/01.jpg"}), emitter)

    async def run():
        return (
            await manager.discover_style("B", styles=["sans", "serif", "mono"]),
            await manager.discover_style("C"),
        )

    assert asyncio.run(run()) == ("serif", None)


def test_prewarm_populates_cache(fake_loader, emitter) -> None:
    loader = fake_loader({PROBE_URL, "a/B/sans-lower/01.jpg"})
    manager = _manager(loader, emitter, prewarm=True)

    async def run() -> None:
        assert await manager.initialize() is True
        await asyncio.gather(*manager._background)

    asyncio.run(run())

    cache = manager.context.cache
    assert cache.cached(PROBE_URL) is not None
    assert cache.cached("a/B/sans-lower/01.jpg") is not None
    assert manager.context.stats.fallbacks_created == 0


def test_stats_snapshot(fake_loader, emitter) -> None:
    manager = _manager(fake_loader({PROBE_URL}), emitter)

    asyncio.run(manager.resolve_text("AA"))
    stats = manager.get_stats()

    assert stats["base_path"] == "a/"
    assert stats["resolved_template"] == TEMPLATE
    assert stats["detection_complete"] is True
    assert stats["assets_detected"] is True
    assert stats["pending_loads"] == 0
    assert stats["cache_size"] == 1
    assert stats["requested"] == 2
    assert stats["loaded"] == 1


def test_stats_before_detection(fake_loader, emitter) -> None:
    stats = _manager(fake_loader(), emitter).get_stats()

    assert stats["detection_complete"] is False
    assert stats["base_path"] is None
    assert stats["assets_detected"] is False
