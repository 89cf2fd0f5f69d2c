"""Stroke capture engine.

Owns the strokes of the drawing currently being written and applies
pointer gestures to them. The engine never renders anything; callers take
a snapshot() and hand it to the rasterizer.
"""

from __future__ import annotations

import logging
from typing import List, Union, Tuple

from ..domain.geometry import Drawing, Point, Stroke

logger = logging.getLogger(__name__)

PointLike = Union[Point, Tuple[float, float]]


def _as_point(point: PointLike) -> Point:
    if isinstance(point, Point):
        return point
    return Point.from_tuple(point)


class StrokeCaptureEngine:
    """Append-only recorder for pointer gestures.

    Strokes are stored as private lists of points. The last stroke is the
    active one while a gesture is open. snapshot() copies everything into
    immutable Drawing/Stroke values, so a snapshot taken for an in-flight
    evaluation never changes when capture continues.

    Example:
        >>> engine = StrokeCaptureEngine()
        >>> engine.begin_stroke((10, 10))
        >>> engine.extend_stroke((60, 60))
        >>> engine.end_stroke()
        >>> engine.snapshot().point_count
        2
    """

    def __init__(self):
        self._strokes: List[List[Point]] = []
        self._active = False

    @property
    def is_drawing(self) -> bool:
        """True while a gesture is open."""
        return self._active

    @property
    def stroke_count(self) -> int:
        return len(self._strokes)

    @property
    def is_empty(self) -> bool:
        return not self._strokes

    def begin_stroke(self, point: PointLike) -> None:
        """Start a new stroke at ``point``.

        Points outside the canvas are kept as-is; clipping happens when
        rendering.
        """
        self._strokes.append([_as_point(point)])
        self._active = True

    def extend_stroke(self, point: PointLike) -> None:
        """Append ``point`` to the last stroke.

        Does nothing when no stroke exists yet, which tolerates move events
        that arrive before the first pointer-down.
        """
        if not self._strokes:
            logger.debug("Ignoring point %r: no stroke started", point)
            return
        self._strokes[-1].append(_as_point(point))

    def end_stroke(self) -> None:
        """Close the active gesture, if any."""
        self._active = False

    def undo(self) -> None:
        """Remove the most recent stroke. No-op on an empty drawing."""
        if self._strokes:
            self._strokes.pop()
        self._active = False

    def clear(self) -> None:
        """Discard every stroke."""
        self._strokes = []
        self._active = False

    def snapshot(self) -> Drawing:
        """Return a detached, immutable copy of the current drawing."""
        return Drawing(tuple(Stroke(tuple(points)) for points in self._strokes))
