"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


SOURCE_PANEL = "Asset Source"
TYPOGRAPHY_PANEL = "Typography"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

StyleOption = Annotated[
    str | None,
    typer.Option(
        "--style",
        "-s",
        help="Style key (sans, serif, mono, script, decorative or random).",
        rich_help_panel=TYPOGRAPHY_PANEL,
    ),
]

CityOption = Annotated[
    str | None,
    typer.Option(
        "--city",
        help="Location code used in asset paths (e.g. NYC).",
        rich_help_panel=TYPOGRAPHY_PANEL,
    ),
]

CaseOption = Annotated[
    str | None,
    typer.Option(
        "--case",
        help="Case transform applied to the text: mixed, upper or lower.",
        rich_help_panel=TYPOGRAPHY_PANEL,
    ),
]

RootOption = Annotated[
    Path | None,
    typer.Option(
        "--root",
        help="Local directory holding the letter images.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=SOURCE_PANEL,
    ),
]

BaseUrlOption = Annotated[
    str | None,
    typer.Option(
        "--base-url",
        help="HTTP(S) origin serving the letter images.",
        rich_help_panel=SOURCE_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file (defaults to $STREETTYPE_CONFIG).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=SOURCE_PANEL,
    ),
]

LocalOption = Annotated[
    bool,
    typer.Option(
        "--local",
        help="Probe the reduced development layout list only.",
        rich_help_panel=SOURCE_PANEL,
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print the resolved letters and statistics as JSON.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

SeedOption = Annotated[
    int | None,
    typer.Option(
        "--seed",
        help="Seed the variant and style draws for reproducible output.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "BaseUrlOption",
    "CaseOption",
    "CityOption",
    "ConfigOption",
    "DebugOption",
    "JsonOption",
    "LocalOption",
    "RootOption",
    "SeedOption",
    "StyleOption",
    "VerboseOption",
]
