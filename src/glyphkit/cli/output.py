"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from glyphkit.core.font import Font
from glyphkit.domain.glyph import CompoundGlyphData, Glyph, ShapedGlyph, SimpleGlyphData
from glyphkit.domain.path import LineTo, MoveTo, PathCommand, QuadraticCurveTo

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphkit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_font_tables(font: Font) -> None:
    """Print layout details and the table directory of a parsed font."""
    console.print(
        f"  loca {font.index_to_loc_format.name.lower()} {SYM_DOT} "
        f"{font.hhea.number_of_h_metrics} hmetrics {SYM_DOT} "
        f"ascender {font.hhea.ascender} {SYM_DOT} descender {font.hhea.descender}"
    )
    platform_id, encoding_id = font.cmap.platform
    console.print(
        f"  cmap format {font.cmap.format} ({platform_id}, {encoding_id}) {SYM_DOT} "
        f"{len(font.cmap):,} mapped characters"
    )

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Tag")
    table.add_column("Offset", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Checksum", justify="right")
    for record in font.directory:
        table.add_row(escape(record.tag), str(record.offset), str(record.length), f"0x{record.checksum:08X}")
    console.print()
    console.print(table)


def print_glyph(glyph: Glyph) -> None:
    """Print header, metrics and structure of a glyph.

    Args:
        glyph: Decoded glyph
    """
    box = glyph.description
    console.print(f"  glyph {glyph.id} {SYM_DOT} [bold]{glyph.kind}[/bold]")
    console.print(f"  bbox ({box.x_min}, {box.y_min}) ({box.x_max}, {box.y_max})")
    console.print(f"  advance {glyph.advance_width} {SYM_DOT} lsb {glyph.left_side_bearing}")

    if isinstance(glyph.data, SimpleGlyphData):
        console.print(
            f"  {glyph.data.number_of_contours} contours {SYM_DOT} "
            f"{len(glyph.data.coordinates)} points {SYM_DOT} "
            f"{len(glyph.data.instructions)} instruction bytes"
        )
    elif isinstance(glyph.data, CompoundGlyphData):
        console.print(f"  {len(glyph.data.components)} components")
        for component in glyph.data.components:
            line = f"    {SYM_DOT} glyph {component.glyph_id} at ({component.dx}, {component.dy})"
            if component.transform is not None:
                t = component.transform
                line += f" [{t.xx:g} {t.xy:g} {t.yx:g} {t.yy:g}]"
            console.print(Text(line))


def print_path(commands: Sequence[PathCommand]) -> None:
    """Print path commands one per line."""
    for command in commands:
        console.print(Text(f"  {format_command(command)}"))


def print_svg(path_data: str) -> None:
    console.print(Text(path_data), soft_wrap=True)


def format_command(command: PathCommand) -> str:
    """Short textual form of a path command, e.g. 'Q 10 0 20 10'."""
    if isinstance(command, MoveTo):
        return f"M {_num(command.to[0])} {_num(command.to[1])}"
    if isinstance(command, LineTo):
        return f"L {_num(command.to[0])} {_num(command.to[1])}"
    if isinstance(command, QuadraticCurveTo):
        return (
            f"Q {_num(command.control[0])} {_num(command.control[1])} "
            f"{_num(command.to[0])} {_num(command.to[1])}"
        )
    raise TypeError(f"Unknown path command: {command!r}")


def print_shaped(shaped: Sequence[ShapedGlyph], paths: Sequence[str] | None = None) -> None:
    """Print one row per shaped glyph.

    Args:
        shaped: Output of Shaper.shape()
        paths: Optional SVG path data per glyph, same order as shaped
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Char")
    table.add_column("Glyph", justify="right")
    table.add_column("Pen X", justify="right")
    table.add_column("Pen Y", justify="right")
    table.add_column("Advance", justify="right")
    table.add_column("Kind")
    if paths is not None:
        table.add_column("Path", overflow="fold")

    for index, item in enumerate(shaped):
        kind = item.glyph.kind + (" (fallback)" if item.fallback else "")
        row = [
            escape(repr(item.char)),
            str(item.glyph_id),
            str(item.pen_x),
            str(item.pen_y),
            str(item.glyph.advance_width),
            kind,
        ]
        if paths is not None:
            row.append(escape(paths[index]))
        table.add_row(*row)
    console.print(table)


def print_measure(advance: int, units_per_em: int, size: float | None) -> None:
    """Print the total advance of a shaped string."""
    line = f"\n  total advance {advance:,} units"
    if size is not None:
        line += f" {SYM_DOT} {advance * size / units_per_em:.2f} at size {size:g}"
    console.print(line)


def print_success(message: str) -> None:
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {message}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")


def _num(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
