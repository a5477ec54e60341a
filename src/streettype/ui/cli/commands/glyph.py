"""Implementation of the `streettype glyph` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from streettype.assets.synth import decode_glyph_url, synthesize_glyph

from .._options import OUTPUT_PANEL, StyleOption
from ..state import emit_error, get_cli_state


def glyph(
    char: str = typer.Argument(..., help="Single character to render."),
    style: StyleOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the SVG to this file instead of stdout.",
            dir_okay=False,
            writable=True,
            resolve_path=True,
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = None,
) -> None:
    """Export the synthesized fallback glyph of a character as SVG."""

    if len(char) != 1:
        raise typer.BadParameter("Expected exactly one character.", param_hint="CHAR")

    markup = decode_glyph_url(synthesize_glyph(char, style or "sans"))
    if output is None:
        typer.echo(markup)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup, encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to write '{output}'.", exception=exc)
        raise typer.Exit(code=1) from exc
    get_cli_state().err_console.print(f"[green]Wrote[/green] {output}")


__all__ = ["glyph"]
