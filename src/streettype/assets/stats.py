"""Diagnostic counters shared by the asset pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(slots=True)
class AssetStats:
    """Monotonic counters; diagnostic only."""

    requested: int = 0
    loaded: int = 0
    failed: int = 0
    cached_hits: int = 0
    fallbacks_created: int = 0
    probes: int = 0

    def snapshot(self) -> dict[str, int]:
        return asdict(self)


__all__ = ["AssetStats"]
