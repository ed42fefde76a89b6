"""Outline point type.

TrueType contours are sequences of points, each either on the outline
(a spline endpoint) or off it (a quadratic control point).
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in absolute font units with its on-curve flag.

    Coordinates are integers straight out of the glyf table and floats
    once a compound component transform has been applied.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        on_curve: True for spline endpoints, False for control points
    """

    x: float
    y: float
    on_curve: bool = True

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x, y, and on_curve fields
        """
        return {"x": self.x, "y": self.y, "on_curve": self.on_curve}
