"""Cached, coalescing asset loads that never fail outward."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging

from streettype.assets.catalog import AssetRef
from streettype.assets.stats import AssetStats
from streettype.assets.synth import GLYPH_HEIGHT, GLYPH_WIDTH, is_synthetic_url
from streettype.core.diagnostics import DiagnosticEmitter, NullEmitter
from streettype.core.exceptions import AssetLoadError, exception_hint
from streettype.core.http import ImageLoader, add_cache_buster


logger = logging.getLogger(__name__)

DEFAULT_LOAD_TIMEOUT = 5.0


@dataclass(frozen=True, slots=True)
class GlyphResource:
    """A decoded letterform ready for layout."""

    source: str
    width: int
    height: int
    is_fallback: bool = False
    is_synthesized: bool = False

    @property
    def is_placeholder(self) -> bool:
        """True for the blank stand-in returned after a failed load."""
        return self.is_fallback and not self.is_synthesized


def placeholder_resource(source: str = "") -> GlyphResource:
    return GlyphResource(
        source=source,
        width=GLYPH_WIDTH,
        height=GLYPH_HEIGHT,
        is_fallback=True,
        is_synthesized=False,
    )


class AssetCache:
    """Load assets by URL with caching and per-key request coalescing.

    Synthetic ``data:`` resources resolve without touching the loader. For
    remote URLs a cache hit returns the stored object, an in-flight hit
    returns a shielded view of the same pending fetch, and anything else
    starts exactly one fetch. Cancelling one waiter leaves the shared fetch
    running for the others. Failures resolve to :func:`placeholder_resource`
    and are not cached, so a later call may retry.
    """

    def __init__(
        self,
        loader: ImageLoader,
        *,
        timeout: float = DEFAULT_LOAD_TIMEOUT,
        stats: AssetStats | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.loader = loader
        self.timeout = timeout
        self.stats = stats or AssetStats()
        self.emitter = emitter or NullEmitter()
        self._cache: dict[str, GlyphResource] = {}
        self._inflight: dict[str, asyncio.Future[GlyphResource]] = {}

    @property
    def size(self) -> int:
        return len(self._cache)

    @property
    def pending(self) -> int:
        return len(self._inflight)

    def cached(self, url: str) -> GlyphResource | None:
        return self._cache.get(url)

    def load(self, asset: AssetRef | str) -> asyncio.Future[GlyphResource]:
        """Return an awaitable resolving to the resource behind ``asset``.

        The cache lookup and in-flight registration happen synchronously, so
        two callers in the same loop iteration share one fetch.
        """
        ref = asset if isinstance(asset, AssetRef) else AssetRef(asset, is_synthetic_url(asset))
        self.stats.requested += 1
        loop = asyncio.get_running_loop()

        cached = self._cache.get(ref.url)
        if cached is not None:
            if not ref.synthetic:
                self.stats.cached_hits += 1
            future: asyncio.Future[GlyphResource] = loop.create_future()
            future.set_result(cached)
            return future

        if ref.synthetic:
            resource = GlyphResource(
                source=ref.url,
                width=GLYPH_WIDTH,
                height=GLYPH_HEIGHT,
                is_fallback=True,
                is_synthesized=True,
            )
            self._cache[ref.url] = resource
            self.stats.fallbacks_created += 1
            future = loop.create_future()
            future.set_result(resource)
            return future

        pending = self._inflight.get(ref.url)
        if pending is not None:
            logger.debug("Already loading image: %s", ref.url)
            return asyncio.shield(pending)

        task = asyncio.ensure_future(self._fetch(ref.url))
        self._inflight[ref.url] = task
        task.add_done_callback(lambda done, url=ref.url: self._release(url, done))
        return asyncio.shield(task)

    def _release(self, url: str, task: asyncio.Future[GlyphResource]) -> None:
        if self._inflight.get(url) is task:
            del self._inflight[url]

    async def _fetch(self, url: str) -> GlyphResource:
        logger.debug("Loading image: %s", url)
        try:
            info = await asyncio.wait_for(self.loader.load(add_cache_buster(url)), self.timeout)
        except asyncio.TimeoutError:
            return self._failed(url, f"Timeout loading image: {url}")
        except AssetLoadError as exc:
            return self._failed(url, str(exc), exc)
        except Exception as exc:  # injected loaders may raise anything
            return self._failed(url, f"Failed to load image: {url} ({exception_hint(exc)})", exc)

        resource = GlyphResource(source=url, width=info.width, height=info.height)
        self._cache[url] = resource
        self._inflight.pop(url, None)
        self.stats.loaded += 1
        self.emitter.event("asset_load", {"url": url, "width": info.width, "height": info.height})
        return resource

    def _failed(self, url: str, message: str, exc: BaseException | None = None) -> GlyphResource:
        self._inflight.pop(url, None)
        self.stats.failed += 1
        self.emitter.warning(message, exc)
        return placeholder_resource(url)


__all__ = [
    "DEFAULT_LOAD_TIMEOUT",
    "AssetCache",
    "GlyphResource",
    "placeholder_resource",
]
