"""Curve reconstruction.

TrueType contours encode a closed quadratic B-spline. On-curve points are
segment endpoints and off-curve points are control points; between two
consecutive off-curve points lies an implied on-curve point at their
midpoint. This module turns point contours into MoveTo / LineTo /
QuadraticCurveTo commands, and flattens compound glyphs into point
contours by resolving their components through the owning font.
"""

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from glyphkit.domain.contour import Point
from glyphkit.domain.glyph import CompoundGlyphData, Glyph, SimpleGlyphData
from glyphkit.domain.path import Coordinate, LineTo, MoveTo, PathCommand, QuadraticCurveTo
from glyphkit.exceptions import CompoundCycleError, CompoundDepthError, CompoundOutlineError

if TYPE_CHECKING:
    from glyphkit.core.font import Font

Contour = Sequence[Point]


def midpoint(a: Point, b: Point) -> Coordinate:
    """Implied on-curve point between two off-curve points."""
    return ((a.x + b.x) / 2, (a.y + b.y) / 2)


def contour_path(points: Contour) -> list[PathCommand]:
    """Convert one closed contour to path commands.

    The path starts at the first on-curve point, or at the implied midpoint
    of the last and first points when every point is off-curve, and ends
    with a segment back to that start point.

    Args:
        points: Points of a single contour in outline order

    Returns:
        MoveTo followed by LineTo/QuadraticCurveTo commands; empty for an
        empty contour
    """
    if not points:
        return []

    start_index = next((i for i, p in enumerate(points) if p.on_curve), None)
    if start_index is None:
        start = midpoint(points[-1], points[0])
        ordered = list(points)
    else:
        start = points[start_index].to_tuple()
        ordered = [*points[start_index + 1 :], *points[:start_index]]

    commands: list[PathCommand] = [MoveTo(start)]
    control: Point | None = None
    for point in ordered:
        if point.on_curve:
            if control is None:
                commands.append(LineTo(point.to_tuple()))
            else:
                commands.append(QuadraticCurveTo(control.to_tuple(), point.to_tuple()))
                control = None
        else:
            if control is not None:
                commands.append(QuadraticCurveTo(control.to_tuple(), midpoint(control, point)))
            control = point

    if control is None:
        commands.append(LineTo(start))
    else:
        commands.append(QuadraticCurveTo(control.to_tuple(), start))
    return commands


def resolve_contours(
    font: "Font",
    glyph: Glyph,
    max_depth: int | None = None,
    _chain: tuple[int, ...] = (),
) -> list[tuple[Point, ...]]:
    """Flatten a glyph into point contours in its own coordinate space.

    Compound components are resolved recursively: each component's contours
    are transformed by its 2x2 matrix and then shifted by its offset.

    Args:
        font: Font owning the glyph, used to decode components
        glyph: Glyph to flatten
        max_depth: Maximum compound nesting (font's configured depth if None)

    Returns:
        List of contours, each a tuple of points

    Raises:
        CompoundCycleError: If a component refers back into the current chain
        CompoundDepthError: If nesting exceeds max_depth
        InvalidGlyphIndexError: If a component refers to a missing glyph
    """
    data = glyph.data
    if isinstance(data, SimpleGlyphData):
        return data.contours()
    if not isinstance(data, CompoundGlyphData):
        return []

    if max_depth is None:
        max_depth = font.max_compound_depth
    if len(_chain) >= max_depth:
        raise CompoundDepthError(glyph.id, max_depth)
    chain = (*_chain, glyph.id)

    contours: list[tuple[Point, ...]] = []
    for component in data.components:
        if component.glyph_id in chain:
            raise CompoundCycleError(component.glyph_id, chain)
        child = font.raw_glyph(component.glyph_id)
        transform = component.transform

        dx: float = component.dx
        dy: float = component.dy
        if transform is not None and component.scaled_offset:
            dx, dy = transform.apply(dx, dy)
            if component.round_xy_to_grid:
                dx, dy = math.floor(dx + 0.5), math.floor(dy + 0.5)

        for contour in resolve_contours(font, child, max_depth, chain):
            placed = []
            for p in contour:
                x, y = transform.apply(p.x, p.y) if transform is not None else (p.x, p.y)
                placed.append(Point(x + dx, y + dy, p.on_curve))
            contours.append(tuple(placed))
    return contours


def check_components(font: "Font", glyph: Glyph, max_depth: int | None = None) -> None:
    """Validate a compound glyph's reference graph without building outlines.

    Each referenced glyph is decoded once however many times it is used, so
    shared components cost nothing extra.

    Raises:
        CompoundCycleError: If a component refers back into the current chain
        CompoundDepthError: If nesting exceeds max_depth
        InvalidGlyphIndexError: If a component refers to a missing glyph
    """
    if max_depth is None:
        max_depth = font.max_compound_depth
    _component_height(font, glyph, max_depth, (), {})


def _component_height(
    font: "Font",
    glyph: Glyph,
    max_depth: int,
    chain: tuple[int, ...],
    heights: dict[int, int],
) -> int:
    # Height is the number of compound levels from glyph down to its leaves.
    # A memoized subtree still has to fit below the current chain.
    if not isinstance(glyph.data, CompoundGlyphData):
        return 0
    if len(chain) >= max_depth:
        raise CompoundDepthError(glyph.id, max_depth)
    chain = (*chain, glyph.id)

    height = 0
    for component in glyph.data.components:
        child_id = component.glyph_id
        if child_id in chain:
            raise CompoundCycleError(child_id, chain)
        if child_id not in heights:
            child = font.raw_glyph(child_id)
            heights[child_id] = _component_height(font, child, max_depth, chain, heights)
        elif len(chain) + heights[child_id] > max_depth:
            raise CompoundDepthError(child_id, max_depth)
        height = max(height, heights[child_id])
    return height + 1


def outline_path(glyph: Glyph, font: "Font | None" = None) -> list[PathCommand]:
    """Path commands for a whole glyph.

    Args:
        glyph: Glyph to draw
        font: Owning font; required for compound glyphs

    Returns:
        Commands for every contour in order; empty for empty glyphs

    Raises:
        CompoundOutlineError: If glyph is compound and no font is given
    """
    if isinstance(glyph.data, CompoundGlyphData):
        if font is None:
            raise CompoundOutlineError(glyph.id)
        contours = resolve_contours(font, glyph)
    elif isinstance(glyph.data, SimpleGlyphData):
        contours = glyph.data.contours()
    else:
        return []
    return [command for contour in contours for command in contour_path(contour)]


def flatten_path(commands: Sequence[PathCommand], tolerance: float = 1.0) -> list[PathCommand]:
    """Replace quadratic segments with line segments.

    For renderers that only draw straight lines. Curves are subdivided
    until the control point lies within `tolerance` font units of the chord
    midpoint.

    Args:
        commands: Path commands as produced by contour_path
        tolerance: Maximum deviation from the true curve, in font units

    Returns:
        Equivalent path made of MoveTo and LineTo only

    Raises:
        ValueError: If tolerance is not positive
    """
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    result: list[PathCommand] = []
    current: Coordinate = (0.0, 0.0)
    for command in commands:
        if isinstance(command, QuadraticCurveTo):
            for point in _flatten_quadratic(current, command.control, command.to, tolerance)[1:]:
                result.append(LineTo(point))
        else:
            result.append(command)
        current = command.to
    return result


def _flatten_quadratic(
    p0: Coordinate, p1: Coordinate, p2: Coordinate, tolerance: float
) -> list[Coordinate]:
    # Distance between the control polygon midpoint and the curve at t=0.5
    curve_mid = (
        0.25 * p0[0] + 0.5 * p1[0] + 0.25 * p2[0],
        0.25 * p0[1] + 0.5 * p1[1] + 0.25 * p2[1],
    )
    chord_mid = ((p0[0] + p2[0]) / 2, (p0[1] + p2[1]) / 2)
    if math.hypot(curve_mid[0] - chord_mid[0], curve_mid[1] - chord_mid[1]) <= tolerance:
        return [p0, p2]

    q1 = ((p0[0] + p1[0]) / 2, (p0[1] + p1[1]) / 2)
    r1 = ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)
    left = _flatten_quadratic(p0, q1, curve_mid, tolerance)
    right = _flatten_quadratic(curve_mid, r1, p2, tolerance)
    return left[:-1] + right
