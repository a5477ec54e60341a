"""Implementation of the `streettype resolve` command."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
import random
from typing import Any

import click
import typer

from streettype.context import AssetContext, create_loader
from streettype.core.config import StreetTypeConfig, load_config
from streettype.core.diagnostics import format_event_message
from streettype.core.exceptions import ConfigurationError, exception_hint
from streettype.typography import LetterDescriptor, TypographyManager

from .._options import (
    BaseUrlOption,
    CaseOption,
    CityOption,
    ConfigOption,
    DebugOption,
    JsonOption,
    LocalOption,
    RootOption,
    SeedOption,
    StyleOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import CLIState, emit_error, set_cli_state


CASE_CHOICES = ("mixed", "upper", "lower")
DETECTION_EVENTS = ("asset_detected", "asset_fallback_mode")


def _load_settings(config_path: Path | None, *, local: bool) -> StreetTypeConfig:
    try:
        config = load_config(config_path)
    except ConfigurationError as exc:
        emit_error(str(exc), exception=exc)
        hint = exception_hint(exc)
        if hint and hint != str(exc):
            typer.echo(hint, err=True)
        raise typer.Exit(code=1) from exc
    if local:
        config.assets = config.assets.model_copy(update={"local_mode": True})
    return config


async def _resolve(
    source: str | Path,
    config: StreetTypeConfig,
    state: CLIState,
    *,
    text: str,
    style: str | None,
    city: str | None,
    case_option: str | None,
    seed: int | None,
) -> tuple[list[LetterDescriptor], dict[str, Any]]:
    context = AssetContext.create(
        create_loader(source),
        config=config.assets,
        emitter=CliEmitter(state=state),
    )
    manager = TypographyManager(context, config=config.typography, rng=random.Random(seed))
    try:
        letters = await manager.resolve_text(
            text, style=style, city=city, case_option=case_option
        )
        return letters, manager.get_stats()
    finally:
        await context.aclose()


def _detection_event(state: CLIState) -> tuple[str, dict[str, Any]] | None:
    """Return the layout detection event recorded during the run, if any."""
    for name in DETECTION_EVENTS:
        events = state.consume_events(name)
        if events:
            return name, events[-1]
    return None


def _describe_source(source: str | None) -> str:
    if not source:
        return "-"
    if source.startswith("data:"):
        return "synthesized"
    return source


def _print_table(
    state: CLIState,
    letters: list[LetterDescriptor],
    stats: dict[str, Any],
    detection: tuple[str, dict[str, Any]] | None,
) -> None:
    from rich.table import Table

    if detection is not None:
        message = format_event_message(*detection)
        if message:
            state.console.print(message, markup=False, highlight=False)

    table = Table(title="Resolved letters")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Char")
    table.add_column("Kind")
    table.add_column("Style")
    table.add_column("Size", justify="right")
    table.add_column("Source", overflow="fold")

    for index, letter in enumerate(letters):
        size = "-"
        if letter.resource is not None:
            size = f"{letter.resource.width}x{letter.resource.height}"
        source = _describe_source(letter.source)
        if letter.is_fallback:
            source = f"[yellow]{source}[/yellow]"
        table.add_row(
            str(index),
            repr(letter.character),
            letter.kind.value,
            letter.style or "-",
            size,
            source,
        )
    state.console.print(table)

    summary = Table(title="Statistics", show_header=False)
    summary.add_column("Key", style="cyan")
    summary.add_column("Value")
    for key, value in stats.items():
        summary.add_row(key, str(value))
    state.console.print(summary)


def resolve(
    text: str = typer.Argument(..., help="Text to resolve into letterforms."),
    style: StyleOption = None,
    city: CityOption = None,
    case_option: CaseOption = None,
    root: RootOption = None,
    base_url: BaseUrlOption = None,
    config_path: ConfigOption = None,
    local: LocalOption = False,
    as_json: JsonOption = False,
    seed: SeedOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Resolve text into letter images, falling back to synthesized glyphs."""

    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)

    if root is not None and base_url is not None:
        raise typer.BadParameter("Provide either --root or --base-url, not both.")
    if case_option is not None and case_option not in CASE_CHOICES:
        raise typer.BadParameter(
            f"Unsupported case option '{case_option}'. Choose from: {', '.join(CASE_CHOICES)}."
        )

    config = _load_settings(config_path, local=local)
    if config.debug:
        state.show_tracebacks = True

    source: str | Path = base_url if base_url is not None else (root or Path.cwd())
    letters, stats = asyncio.run(
        _resolve(
            source,
            config,
            state,
            text=text,
            style=style,
            city=city,
            case_option=case_option,
            seed=seed,
        )
    )

    detection = _detection_event(state)
    if as_json:
        payload = {
            "letters": [letter.to_dict() for letter in letters],
            "stats": stats,
            "detection": {"event": detection[0], **detection[1]} if detection else None,
        }
        typer.echo(json.dumps(payload, indent=2))
        return
    _print_table(state, letters, stats, detection)


__all__ = ["resolve"]
