"""Bridges from path commands to fontTools pens.

Any fontTools AbstractPen (RecordingPen, TTGlyphPen, SVGPathPen,
BoundsPen...) can consume a glyph outline through draw_path().
"""

from collections.abc import Sequence

from fontTools.pens.basePen import AbstractPen
from fontTools.pens.svgPathPen import SVGPathPen

from glyphkit.domain.path import LineTo, MoveTo, PathCommand, QuadraticCurveTo


def draw_path(commands: Sequence[PathCommand], pen: AbstractPen) -> None:
    """Replay path commands onto a fontTools pen.

    Every MoveTo after the first closes the previous contour, and the last
    contour is closed at the end.

    Args:
        commands: Output of outline_path() or contour_path()
        pen: Target pen
    """
    open_contour = False
    for command in commands:
        if isinstance(command, MoveTo):
            if open_contour:
                pen.closePath()
            pen.moveTo(command.to)
            open_contour = True
        elif isinstance(command, LineTo):
            pen.lineTo(command.to)
        elif isinstance(command, QuadraticCurveTo):
            pen.qCurveTo(command.control, command.to)
    if open_contour:
        pen.closePath()


def svg_path(commands: Sequence[PathCommand]) -> str:
    """SVG path data ("M.. L.. Q.. Z") for a command sequence.

    Coordinates are in font units with Y up, as stored in the font.
    """
    pen = SVGPathPen(None, ntos=_format_number)
    draw_path(commands, pen)
    return pen.getCommands()


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
