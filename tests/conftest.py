from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

import pytest

from streettype.core.exceptions import AssetLoadError
from streettype.core.http import ImageInfo, strip_cache_buster


class FakeLoader:
    """In-memory image loader recording every requested URL."""

    def __init__(
        self,
        existing: Iterable[str] = (),
        *,
        size: tuple[int, int] = (120, 180),
        delay: float = 0.0,
        hang: Iterable[str] = (),
        flaky: Iterable[str] = (),
    ) -> None:
        self.existing = set(existing)
        self.size = size
        self.delay = delay
        self.hang = set(hang)
        self.flaky = set(flaky)
        self.calls: list[str] = []

    async def load(self, url: str) -> ImageInfo:
        key = strip_cache_buster(url)
        self.calls.append(key)
        if key in self.hang:
            await asyncio.sleep(3600)
        if self.delay:
            await asyncio.sleep(self.delay)
        if key in self.flaky and self.calls.count(key) > 1:
            raise AssetLoadError(key, "connection reset")
        if key not in self.existing:
            raise AssetLoadError(key, "HTTP 404")
        return ImageInfo(url=key, width=self.size[0], height=self.size[1])


class RecordingEmitter:
    """Diagnostic emitter keeping everything it receives."""

    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[tuple[str, BaseException | None]] = []
        self.errors: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append((message, exc))

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def named(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


@pytest.fixture
def fake_loader() -> type[FakeLoader]:
    return FakeLoader


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()
