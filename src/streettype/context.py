"""Composition root owning the long-lived asset pipeline collaborators."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from streettype.assets.catalog import VariantCatalog
from streettype.assets.loader import AssetCache
from streettype.assets.probe import ExistenceProber
from streettype.assets.resolver import PathResolver
from streettype.assets.stats import AssetStats
from streettype.assets.synth import GlyphSynthesizer
from streettype.core.config import AssetConfig
from streettype.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from streettype.core.http import FileImageLoader, HttpImageLoader, ImageLoader


def create_loader(source: str | Path) -> ImageLoader:
    """Pick an image loader for an HTTP(S) origin or a local directory."""
    text = str(source)
    if text.startswith(("http://", "https://")):
        return HttpImageLoader(text)
    return FileImageLoader(Path(text))


@dataclass(slots=True)
class AssetContext:
    """Everything that must live exactly as long as one detection result.

    A fresh context starts undetected with empty caches; sharing one context
    between callers is what makes "detect once" and request coalescing hold.
    """

    config: AssetConfig
    loader: ImageLoader
    emitter: DiagnosticEmitter
    stats: AssetStats
    synthesizer: GlyphSynthesizer
    prober: ExistenceProber
    resolver: PathResolver
    catalog: VariantCatalog
    cache: AssetCache

    @classmethod
    def create(
        cls,
        loader: ImageLoader,
        *,
        config: AssetConfig | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> AssetContext:
        config = config or AssetConfig()
        emitter = emitter or LoggingEmitter(logger_obj=logging.getLogger("streettype"))
        stats = AssetStats()
        synthesizer = GlyphSynthesizer()
        prober = ExistenceProber(
            loader, timeout=config.probe_timeout, stats=stats, emitter=emitter
        )
        base_paths, templates = config.candidates()
        resolver = PathResolver(
            prober, base_paths=base_paths, templates=templates, emitter=emitter
        )
        catalog = VariantCatalog(
            resolver,
            prober,
            synthesizer=synthesizer,
            max_variants=config.max_variants,
            extension=config.numbered_extension,
            emitter=emitter,
        )
        cache = AssetCache(loader, timeout=config.load_timeout, stats=stats, emitter=emitter)
        return cls(
            config=config,
            loader=loader,
            emitter=emitter,
            stats=stats,
            synthesizer=synthesizer,
            prober=prober,
            resolver=resolver,
            catalog=catalog,
            cache=cache,
        )

    async def aclose(self) -> None:
        close = getattr(self.loader, "aclose", None)
        if close is not None:
            await close()


__all__ = ["AssetContext", "create_loader"]
