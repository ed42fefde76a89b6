"""CLI application entry point for glyphkit.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated, NoReturn

import typer

from glyphkit import __version__
from glyphkit.cli.output import (
    console,
    print_error,
    print_font_info,
    print_font_tables,
    print_glyph,
    print_header,
    print_measure,
    print_path,
    print_shaped,
    print_step,
    print_success,
    print_svg,
)
from glyphkit.config import (
    FallbackPolicy,
    GlyphkitSettings,
    LoggingConfig,
    ParserConfig,
    ShaperConfig,
)
from glyphkit.core import Font, Shaper, flatten_path
from glyphkit.exceptions import FontLoadError, FormatError, GlyphkitError
from glyphkit.io import FontReader, svg_path
from glyphkit.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="glyphkit",
    help="Inspect TrueType fonts: tables, glyph outlines and shaped text.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphkit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect TrueType fonts: tables, glyph outlines and shaped text."""
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = GlyphkitSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level.upper()),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
    )
    ctx.obj = settings


@app.command()
def info(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(help="Path to a TrueType font file", show_default=False),
    ],
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail when a table checksum does not match",
        ),
    ] = False,
) -> None:
    """Show font header values, cmap details and the table directory.

    Example:
        glyphkit info Lato-Regular.ttf
    """
    settings = _settings(ctx)
    if strict:
        settings.parser = ParserConfig(
            max_compound_depth=settings.parser.max_compound_depth,
            verify_checksums=True,
            strict_checksums=True,
        )

    print_header(__version__)
    print_step("Loading font")
    try:
        font = _load_font(font_path, settings.parser)
        print_font_info(
            font_path=str(font_path),
            font_type="TrueType",
            glyph_count=font.glyph_count(),
            upm=font.units_per_em,
        )
        print_font_tables(font)
    except typer.Exit:
        raise
    except Exception as e:
        _exit_with_error(e)


@app.command()
def glyph(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(help="Path to a TrueType font file", show_default=False),
    ],
    glyph_id: Annotated[
        int,
        typer.Argument(help="Glyph id (0 is .notdef)", min=0, show_default=False),
    ],
    svg: Annotated[
        bool,
        typer.Option("--svg", help="Print the outline as SVG path data"),
    ] = False,
    tolerance: Annotated[
        float | None,
        typer.Option(
            "--flatten",
            help="Replace curves with line segments within this many font units",
            min=0.01,
        ),
    ] = None,
) -> None:
    """Decode one glyph and print its outline.

    Example:
        glyphkit glyph Lato-Regular.ttf 36 --svg
    """
    settings = _settings(ctx)
    try:
        font = _load_font(font_path, settings.parser)
        decoded = font.glyph(glyph_id)
        commands = font.outline_path(decoded)
        if tolerance is not None:
            commands = flatten_path(commands, tolerance)

        print_glyph(decoded)
        print_step("Outline")
        if svg:
            print_svg(svg_path(commands))
        else:
            print_path(commands)
    except typer.Exit:
        raise
    except Exception as e:
        _exit_with_error(e)


@app.command()
def shape(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(help="Path to a TrueType font file", show_default=False),
    ],
    text: Annotated[
        str,
        typer.Argument(help="Text to lay out", show_default=False),
    ],
    fallback: Annotated[
        str,
        typer.Option(
            "--fallback",
            "-f",
            help="Substitute for glyphs that fail to decode (notdef|empty|raise)",
        ),
    ] = "notdef",
    size: Annotated[
        float | None,
        typer.Option(
            "--size",
            "-s",
            help="Also report the total advance at this em size",
            min=0.0,
        ),
    ] = None,
    svg: Annotated[
        bool,
        typer.Option("--svg", help="Add SVG path data for each glyph"),
    ] = False,
) -> None:
    """Lay out text one glyph per character and print pen positions.

    Example:
        glyphkit shape Lato-Regular.ttf "Hello"
    """
    settings = _settings(ctx)
    try:
        policy = FallbackPolicy(fallback.lower())
    except ValueError:
        print_error(
            f"Invalid fallback: {fallback}",
            details="Valid values: notdef, empty, raise",
        )
        raise typer.Exit(code=1)
    settings.shaper = ShaperConfig(fallback=policy)

    try:
        font = _load_font(font_path, settings.parser)
        shaper = Shaper(font, settings.shaper)
        shaped = shaper.shape(text)

        paths = None
        if svg:
            paths = [svg_path(font.outline_path(item.glyph)) for item in shaped]

        print_shaped(shaped, paths)
        print_measure(sum(item.glyph.advance_width for item in shaped), font.units_per_em, size)
        print_success(f"{len(shaped)} glyphs shaped")
    except typer.Exit:
        raise
    except Exception as e:
        _exit_with_error(e)


def _settings(ctx: typer.Context) -> GlyphkitSettings:
    if isinstance(ctx.obj, GlyphkitSettings):
        return ctx.obj
    return GlyphkitSettings()


def _load_font(font_path: Path, config: ParserConfig) -> Font:
    """Load and parse a font file for a command.

    Raises:
        typer.Exit: If the path is missing or not a file
        FontLoadError: If the file is not a readable TrueType font
    """
    if not font_path.exists():
        print_error(
            f"Input file not found: {font_path}",
            details=f"The file '{font_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not font_path.is_file():
        print_error(
            f"Input path is not a file: {font_path}",
            details="Please provide a path to a TrueType font file.",
        )
        raise typer.Exit(code=1)

    reader = FontReader(font_path, config)
    try:
        reader.load()
    except (FormatError, OSError) as e:
        raise FontLoadError(str(font_path), str(e)) from e
    return reader.font


def _exit_with_error(error: Exception) -> NoReturn:
    """Print an error line for a failed command and exit with code 1."""
    if isinstance(error, FontLoadError):
        print_error(f"Could not load font: {error.reason}")
    elif isinstance(error, GlyphkitError):
        print_error(str(error), details=type(error).__name__)
    else:
        print_error(f"Unexpected error: {error}")
    raise typer.Exit(code=1) from error


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
