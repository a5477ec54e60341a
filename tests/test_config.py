from __future__ import annotations

from pathlib import Path

import pytest

from streettype.assets.constants import DEFAULT_BASE_PATHS, LOCAL_TEMPLATES
from streettype.context import AssetContext
from streettype.core.config import (
    CONFIG_ENV,
    AssetConfig,
    StreetTypeConfig,
    TypographyConfig,
    load_config,
)
from streettype.core.exceptions import ConfigurationError


def test_defaults_match_builtin_candidates() -> None:
    config = StreetTypeConfig()

    assert config.assets.base_paths == list(DEFAULT_BASE_PATHS)
    assert len(config.assets.templates) == 6
    assert config.assets.probe_timeout == 1.0
    assert config.assets.load_timeout == 5.0
    assert config.assets.max_variants == 3
    assert config.typography.style == "sans"
    assert config.typography.case_option == "mixed"
    assert config.debug is False


def test_local_mode_selects_reduced_lists() -> None:
    base_paths, templates = AssetConfig(local_mode=True).candidates()

    assert base_paths == ["assets/"]
    assert templates == list(LOCAL_TEMPLATES)


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "streettype.yml"
    path.write_text(
        "assets:\n"
        "  base_paths: ['static/']\n"
        "  max_variants: 5\n"
        "  numbered_extension: .png\n"
        "typography:\n"
        "  city: LA\n"
        "  case_option: upper\n"
        "debug: true\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.assets.base_paths == ["static/"]
    assert config.assets.max_variants == 5
    assert config.assets.numbered_extension == ".png"
    assert config.typography.city == "LA"
    assert config.typography.case_option == "upper"
    assert config.debug is True


def test_load_config_uses_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "env.yml"
    path.write_text("typography:\n  style: serif\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(path))

    assert load_config().typography.style == "serif"


def test_load_config_without_sources_returns_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV, raising=False)

    assert load_config() == StreetTypeConfig()


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == StreetTypeConfig()


@pytest.mark.parametrize(
    "content",
    [
        "assets:\n  unknown: 1\n",
        "assets:\n  max_variants: 6\n",
        "assets:\n  probe_timeout: 0\n",
        "assets:\n  templates: ['{base}{letter}.jpg']\n",
        "typography:\n  case_option: title\n",
        "typography:\n  available_styles: []\n",
        "- just\n- a list\n",
        "assets: [unclosed\n",
    ],
)
def test_invalid_configuration_is_rejected(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Unable to read"):
        load_config(tmp_path / "missing.yml")


def test_typography_defaults_list_available_styles() -> None:
    assert "random" not in TypographyConfig().available_styles


def test_numbered_extension_reaches_catalog() -> None:
    context = AssetContext.create(object(), config=AssetConfig(numbered_extension=".png"))

    assert context.catalog.extension == ".png"
    assert context.config.templates[0].endswith(".jpg")
