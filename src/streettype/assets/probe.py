"""Existence checks for candidate asset URLs."""

from __future__ import annotations

import asyncio
import logging

from streettype.assets.stats import AssetStats
from streettype.core.diagnostics import DiagnosticEmitter, NullEmitter
from streettype.core.exceptions import AssetLoadError
from streettype.core.http import ImageLoader, add_cache_buster, strip_cache_buster


logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 1.0


class ExistenceProber:
    """Check whether a URL resolves to a loadable image.

    Results are memoised by URL (cache-busting parameter excluded) for the
    lifetime of the prober. Concurrent probes of the same URL are not
    coalesced; each may reach the loader.
    """

    def __init__(
        self,
        loader: ImageLoader,
        *,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        stats: AssetStats | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.loader = loader
        self.timeout = timeout
        self.stats = stats or AssetStats()
        self.emitter = emitter or NullEmitter()
        self._known: dict[str, bool] = {}

    def cached(self, url: str) -> bool | None:
        return self._known.get(strip_cache_buster(url))

    async def exists(self, url: str) -> bool:
        key = strip_cache_buster(url)
        known = self._known.get(key)
        if known is not None:
            logger.debug("Path cache hit: %s, exists: %s", key, known)
            return known

        self.stats.probes += 1
        timed_out = False
        try:
            await asyncio.wait_for(self.loader.load(add_cache_buster(key)), self.timeout)
        except asyncio.TimeoutError:
            timed_out = True
            result = False
        except AssetLoadError as exc:
            logger.debug("Path does not exist: %s (%s)", key, exc.reason or exc)
            result = False
        except Exception as exc:  # injected loaders may raise anything
            logger.warning("Unexpected error probing %s: %s", key, exc)
            result = False
        else:
            result = True

        self._known[key] = result
        self.emitter.event("asset_probe", {"url": key, "exists": result, "timeout": timed_out})
        return result


__all__ = ["DEFAULT_PROBE_TIMEOUT", "ExistenceProber"]
