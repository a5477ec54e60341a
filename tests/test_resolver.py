from __future__ import annotations

import asyncio

from streettype.assets.probe import ExistenceProber
from streettype.assets.resolver import DetectionState, PathResolver, PathTemplate


BASES = ["a/", "b/"]
TEMPLATES = [
    "{base}{letter}/{style}/{variant}.jpg",
    "{base}{style}/{letter}/{variant}.jpg",
]


def _resolver(loader, emitter=None) -> PathResolver:
    prober = ExistenceProber(loader, emitter=emitter)
    return PathResolver(prober, base_paths=BASES, templates=TEMPLATES, emitter=emitter)


def test_template_renders_known_placeholders() -> None:
    template = PathTemplate("{base}{city}/{letter}/{style}/{variant}.jpg")

    assert template.render(base="x/", city="NYC", letter="A", style="sans", variant="01") == (
        "x/NYC/A/sans/01.jpg"
    )
    assert template.render(base="x/") == "x/{city}/{letter}/{style}/{variant}.jpg"


def test_candidates_are_base_major() -> None:
    resolver = _resolver(object())

    urls = [url for _, _, url in resolver.candidates()]

    assert urls == [
        "a/A/sans-upper/01.jpg",
        "a/sans-upper/A/01.jpg",
        "b/A/sans-upper/01.jpg",
        "b/sans-upper/A/01.jpg",
    ]


def test_detection_stops_at_first_match(fake_loader, emitter) -> None:
    loader = fake_loader({"b/sans-upper/A/01.jpg"})
    resolver = _resolver(loader, emitter)

    resolved = asyncio.run(resolver.resolve())

    assert resolved.detected is True
    assert resolved.base_path == "b/"
    assert resolved.template.pattern == TEMPLATES[1]
    assert resolver.state is DetectionState.DETECTED
    assert resolver.attempts == 4
    assert len(loader.calls) == 4
    failures = [p for p in emitter.named("asset_probe") if not p["exists"]]
    assert len(failures) == 3
    assert emitter.named("asset_detected") == [
        {"base": "b/", "template": TEMPLATES[1], "probes": 4}
    ]


def test_detection_short_circuits_on_first_candidate(fake_loader) -> None:
    loader = fake_loader({"a/A/sans-upper/01.jpg", "b/sans-upper/A/01.jpg"})
    resolver = _resolver(loader)

    resolved = asyncio.run(resolver.resolve())

    assert resolved.base_path == "a/"
    assert loader.calls == ["a/A/sans-upper/01.jpg"]


def test_exhausted_candidates_switch_to_fallback_only(fake_loader, emitter) -> None:
    loader = fake_loader()
    resolver = _resolver(loader, emitter)

    resolved = asyncio.run(resolver.resolve())

    assert resolved.detected is False
    assert resolved.template is None
    assert resolved.base_path == "assets/"
    assert resolver.state is DetectionState.FALLBACK_ONLY
    assert len(loader.calls) == 4
    assert emitter.warnings
    assert emitter.named("asset_fallback_mode") == [{"probes": 4}]


def test_concurrent_callers_share_one_detection(fake_loader) -> None:
    loader = fake_loader({"a/A/sans-upper/01.jpg"}, delay=0.01)
    resolver = _resolver(loader)

    async def run():
        return await asyncio.gather(*(resolver.resolve() for _ in range(5)))

    results = asyncio.run(run())

    assert all(result is results[0] for result in results)
    assert loader.calls == ["a/A/sans-upper/01.jpg"]


def test_no_probes_after_detection(fake_loader) -> None:
    loader = fake_loader({"b/A/sans-upper/01.jpg"})
    resolver = _resolver(loader)

    async def run():
        first = await resolver.resolve()
        calls = len(loader.calls)
        for _ in range(10):
            assert await resolver.resolve() is first
        return calls

    calls = asyncio.run(run())

    assert calls == 3
    assert len(loader.calls) == calls
    assert resolver.complete is True
