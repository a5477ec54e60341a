"""Primary public API for StreetType."""

from __future__ import annotations

from streettype.assets import (
    AssetCache,
    AssetRef,
    AssetStats,
    DetectionState,
    ExistenceProber,
    GlyphResource,
    GlyphSynthesizer,
    PathResolver,
    PathTemplate,
    ResolvedBase,
    VariantCatalog,
    synthesize_glyph,
)
from streettype.context import AssetContext, create_loader
from streettype.core.config import AssetConfig, StreetTypeConfig, TypographyConfig, load_config
from streettype.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from streettype.core.exceptions import (
    AssetLoadError,
    ConfigurationError,
    StreetTypeError,
    UnknownStyleError,
)
from streettype.core.http import FileImageLoader, HttpImageLoader, ImageInfo, ImageLoader
from streettype.typography import LetterDescriptor, LetterKind, TypographyManager, apply_case
from streettype.version import get_version


__version__ = get_version()

__all__ = [
    "AssetCache",
    "AssetConfig",
    "AssetContext",
    "AssetLoadError",
    "AssetRef",
    "AssetStats",
    "ConfigurationError",
    "DetectionState",
    "DiagnosticEmitter",
    "ExistenceProber",
    "FileImageLoader",
    "GlyphResource",
    "GlyphSynthesizer",
    "HttpImageLoader",
    "ImageInfo",
    "ImageLoader",
    "LetterDescriptor",
    "LetterKind",
    "LoggingEmitter",
    "NullEmitter",
    "PathResolver",
    "PathTemplate",
    "ResolvedBase",
    "StreetTypeConfig",
    "StreetTypeError",
    "TypographyConfig",
    "TypographyManager",
    "UnknownStyleError",
    "VariantCatalog",
    "__version__",
    "apply_case",
    "create_loader",
    "load_config",
    "synthesize_glyph",
]
