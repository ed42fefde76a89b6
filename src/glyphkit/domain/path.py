"""Drawable path commands.

A glyph outline is handed to renderers as a flat sequence of commands.
Each contour starts with a MoveTo and ends with a segment that returns to
its start point.
"""

from dataclasses import dataclass
from typing import Any

Coordinate = tuple[float, float]


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at `to`."""

    to: Coordinate

    def to_dict(self) -> dict[str, Any]:
        return {"op": "moveTo", "to": list(self.to)}


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment from the current point to `to`."""

    to: Coordinate

    def to_dict(self) -> dict[str, Any]:
        return {"op": "lineTo", "to": list(self.to)}


@dataclass(frozen=True, slots=True)
class QuadraticCurveTo:
    """Quadratic Bezier from the current point to `to` through `control`."""

    control: Coordinate
    to: Coordinate

    def to_dict(self) -> dict[str, Any]:
        return {"op": "qCurveTo", "control": list(self.control), "to": list(self.to)}


PathCommand = MoveTo | LineTo | QuadraticCurveTo
