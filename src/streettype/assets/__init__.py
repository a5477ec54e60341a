"""Asset resolution façade used to turn characters into renderable letterforms.

Architecture
: `ExistenceProber` answers "does this URL load?" through an injected image
  loader, memoising each answer so repeated candidates never hit the network
  twice.
: `PathResolver` walks the base path x template grid once, in a fixed order,
  and settles on either a detected layout or fallback-only mode.
: `VariantCatalog` applies the per-class naming rules (numbered folders for
  digits and symbols, template-driven folders for letters) and probes the
  numbered variants, handing back a synthesized glyph when nothing exists.
: `AssetCache` loads the chosen URL, caches decoded resources, and coalesces
  concurrent requests for the same key into a single fetch.
: `GlyphSynthesizer` renders the deterministic SVG stand-ins.

Goal
: Guarantee a renderable result for every character, whatever the state of
  the asset host, while keeping network chatter to a minimum.
"""

from streettype.assets.catalog import AssetRef, CharacterClass, VariantCatalog, classify
from streettype.assets.loader import AssetCache, GlyphResource, placeholder_resource
from streettype.assets.probe import ExistenceProber
from streettype.assets.resolver import DetectionState, PathResolver, PathTemplate, ResolvedBase
from streettype.assets.stats import AssetStats
from streettype.assets.synth import GlyphSynthesizer, synthesize_glyph


__all__ = [
    "AssetCache",
    "AssetRef",
    "AssetStats",
    "CharacterClass",
    "DetectionState",
    "ExistenceProber",
    "GlyphResource",
    "GlyphSynthesizer",
    "PathResolver",
    "PathTemplate",
    "ResolvedBase",
    "VariantCatalog",
    "classify",
    "placeholder_resource",
    "synthesize_glyph",
]
