"""Configuration models used by the letterform resolver.

AssetConfig

`base_paths` (`list[str]`)
: Candidate root prefixes probed in order during detection. The empty string
  means "relative to the asset root".

`templates` (`list[str]`)
: Candidate path templates using the `{base}`, `{city}`, `{letter}`,
  `{style}` and `{variant}` placeholders. Tried in order for each base path.

`local_mode` (`bool`)
: Probe the reduced `local_base_paths` x `local_templates` lists instead of
  the full ones. Useful when assets are served from a development host and
  each miss costs a round-trip.

`probe_timeout` (`float`)
: Seconds granted to each existence probe before it counts as missing.

`load_timeout` (`float`)
: Seconds granted to each asset load before a placeholder is returned.

`max_variants` (`int`)
: Number of numbered variants probed per character (1 to 5).

`numbered_extension` (`str`)
: File extension of the numbered digit and symbol variants. Letter paths take
  theirs from the templates.

TypographyConfig

`style` (`str`)
: Default style key. `random` picks an independent style per character.

`city` (`str`)
: Default location code used in asset paths.

`case_option` (`mixed | upper | lower`)
: Case transform applied to the whole text before resolution.

`available_styles` (`list[str]`)
: Styles drawn from in random mode and during style discovery.

`prewarm` (`bool`)
: Queue background loads for a handful of common letters after detection.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from streettype.assets.constants import (
    ASSET_EXTENSION,
    AVAILABLE_STYLES,
    DEFAULT_BASE_PATHS,
    DEFAULT_MAX_VARIANTS,
    DEFAULT_TEMPLATES,
    LOCAL_BASE_PATHS,
    LOCAL_TEMPLATES,
    MAX_VARIANTS_LIMIT,
)
from streettype.core.exceptions import ConfigurationError


CONFIG_ENV = "STREETTYPE_CONFIG"

_REQUIRED_PLACEHOLDERS = ("{base}", "{letter}", "{style}", "{variant}")


class AssetConfig(BaseModel):
    """Asset layout discovery and loading settings."""

    model_config = ConfigDict(extra="forbid")

    base_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_BASE_PATHS))
    templates: list[str] = Field(default_factory=lambda: list(DEFAULT_TEMPLATES))
    local_base_paths: list[str] = Field(default_factory=lambda: list(LOCAL_BASE_PATHS))
    local_templates: list[str] = Field(default_factory=lambda: list(LOCAL_TEMPLATES))
    local_mode: bool = False
    probe_timeout: float = Field(default=1.0, gt=0, le=3.0)
    load_timeout: float = Field(default=5.0, gt=0)
    max_variants: int = Field(default=DEFAULT_MAX_VARIANTS, ge=1, le=MAX_VARIANTS_LIMIT)
    numbered_extension: str = ASSET_EXTENSION

    @field_validator("templates", "local_templates")
    @classmethod
    def check_placeholders(cls, value: list[str]) -> list[str]:
        """Reject templates that cannot address an individual variant."""
        for template in value:
            missing = [token for token in _REQUIRED_PLACEHOLDERS if token not in template]
            if missing:
                raise ValueError(f"template '{template}' lacks {', '.join(missing)}")
        return value

    def candidates(self) -> tuple[list[str], list[str]]:
        """Return the (base paths, templates) lists matching the probing policy."""
        if self.local_mode:
            return list(self.local_base_paths), list(self.local_templates)
        return list(self.base_paths), list(self.templates)


class TypographyConfig(BaseModel):
    """Defaults applied when resolving text."""

    model_config = ConfigDict(extra="forbid")

    style: str = "sans"
    city: str = "NYC"
    case_option: Literal["mixed", "upper", "lower"] = "mixed"
    available_styles: list[str] = Field(default_factory=lambda: list(AVAILABLE_STYLES))
    prewarm: bool = False

    @field_validator("available_styles")
    @classmethod
    def check_styles(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("available_styles cannot be empty")
        return value


class StreetTypeConfig(BaseModel):
    """Top-level configuration document."""

    model_config = ConfigDict(extra="forbid")

    assets: AssetConfig = Field(default_factory=AssetConfig)
    typography: TypographyConfig = Field(default_factory=TypographyConfig)
    debug: bool = False


def load_config(path: Path | str | None = None) -> StreetTypeConfig:
    """Load a YAML configuration file, falling back to defaults.

    When ``path`` is omitted the ``STREETTYPE_CONFIG`` environment variable is
    consulted. Without either, the built-in defaults are returned.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV)
        if not env_path:
            return StreetTypeConfig()
        path = env_path

    config_path = Path(path).expanduser()
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration '{config_path}'.") from exc

    try:
        payload: Any = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{config_path}'.") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Configuration '{config_path}' must be a mapping.")

    try:
        return StreetTypeConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration '{config_path}': {exc}") from exc


__all__ = [
    "CONFIG_ENV",
    "AssetConfig",
    "StreetTypeConfig",
    "TypographyConfig",
    "load_config",
]
