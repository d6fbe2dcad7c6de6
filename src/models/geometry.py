"""
Geometry primitives for visibility measurement
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in viewport coordinates"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    def intersection(self, other: "Rect") -> "Rect | None":
        """Overlapping rectangle, or None when the rects don't touch"""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right < left or bottom < top:
            return None
        return Rect(left, top, right - left, bottom - top)


def visible_ratio(bounds: Rect, viewport: Rect) -> float:
    """
    Fraction of bounds' area that lies inside the viewport

    A zero-area element counts as fully visible while it touches the viewport.

    Example:
        visible_ratio(Rect(0, 50, 100, 100), Rect(0, 0, 100, 100))  # 0.5
    """
    overlap = bounds.intersection(viewport)
    if overlap is None:
        return 0.0
    if bounds.area == 0:
        return 1.0
    return min(1.0, overlap.area / bounds.area)
