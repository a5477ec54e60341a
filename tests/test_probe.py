from __future__ import annotations

import asyncio
import logging

import pytest

from streettype.assets.probe import ExistenceProber
from streettype.assets.stats import AssetStats


def test_probe_reports_existing_and_missing(fake_loader) -> None:
    loader = fake_loader({"assets/A/01.jpg"})
    prober = ExistenceProber(loader)

    async def run() -> tuple[bool, bool]:
        return await prober.exists("assets/A/01.jpg"), await prober.exists("assets/B/01.jpg")

    assert asyncio.run(run()) == (True, False)
    assert prober.cached("assets/A/01.jpg") is True
    assert prober.cached("assets/B/01.jpg") is False
    assert prober.cached("assets/C/01.jpg") is None


def test_probe_memo_ignores_cache_buster(fake_loader) -> None:
    loader = fake_loader({"assets/A/01.jpg"})
    stats = AssetStats()
    prober = ExistenceProber(loader, stats=stats)

    async def run() -> list[bool]:
        return [
            await prober.exists("assets/A/01.jpg"),
            await prober.exists("assets/A/01.jpg?t=123"),
            await prober.exists("assets/A/01.jpg"),
        ]

    assert asyncio.run(run()) == [True, True, True]
    assert loader.calls == ["assets/A/01.jpg"]
    assert stats.probes == 1


def test_probe_timeout_counts_as_missing(fake_loader, emitter) -> None:
    loader = fake_loader({"slow.jpg"}, hang={"slow.jpg"})
    prober = ExistenceProber(loader, timeout=0.01, emitter=emitter)

    assert asyncio.run(prober.exists("slow.jpg")) is False
    assert emitter.named("asset_probe") == [{"url": "slow.jpg", "exists": False, "timeout": True}]


def test_probe_survives_unexpected_loader_errors(caplog: pytest.LogCaptureFixture) -> None:
    class BrokenLoader:
        async def load(self, url: str):
            raise ValueError("boom")

    prober = ExistenceProber(BrokenLoader())

    with caplog.at_level(logging.WARNING, logger="streettype.assets.probe"):
        assert asyncio.run(prober.exists("assets/A/01.jpg")) is False
    assert any("boom" in record.getMessage() for record in caplog.records)
