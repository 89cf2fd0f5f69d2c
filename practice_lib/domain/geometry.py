"""Geometric value objects for stroke capture."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple
import math


@dataclass(frozen=True)
class Point:
    """Immutable 2D point in canvas pixel space."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to an (x, y) tuple, the form Pillow draws from."""
        return (self.x, self.y)

    def to_list(self) -> List[float]:
        """Convert to list for JSON serialization."""
        return [float(self.x), float(self.y)]

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> Point:
        """Create from an (x, y) pair."""
        return cls(float(t[0]), float(t[1]))


@dataclass(frozen=True)
class Stroke:
    """One pointer gesture as an ordered, immutable sequence of points.

    Point order is temporal order. A stroke with a single point is kept so
    that undo stays symmetric with begin, but it does not produce ink.
    """
    points: Tuple[Point, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, idx) -> Point:
        return self.points[idx]

    @property
    def start(self) -> Point:
        """First point of stroke."""
        return self.points[0] if self.points else Point(0, 0)

    @property
    def end(self) -> Point:
        """Last point of stroke."""
        return self.points[-1] if self.points else Point(0, 0)

    @property
    def is_visible(self) -> bool:
        """True when the stroke has enough points to render as a line."""
        return len(self.points) >= 2

    def to_list(self) -> List[List[float]]:
        """Convert to nested list for JSON serialization."""
        return [p.to_list() for p in self.points]

    @classmethod
    def from_tuples(cls, tuples: Iterable[Sequence[float]]) -> Stroke:
        """Create from a sequence of (x, y) pairs."""
        return cls(tuple(Point.from_tuple(t) for t in tuples))


@dataclass(frozen=True)
class Drawing:
    """All strokes of one character attempt, in creation order.

    Drawings are snapshot values: the capture engine hands out a new
    Drawing each time and never shares its own mutable storage.
    """
    strokes: Tuple[Stroke, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self.strokes)

    def __getitem__(self, idx) -> Stroke:
        return self.strokes[idx]

    @property
    def is_empty(self) -> bool:
        return not self.strokes

    @property
    def point_count(self) -> int:
        return sum(len(s) for s in self.strokes)

    def to_list(self) -> List[List[List[float]]]:
        """Convert to nested lists, the format used by the JSON API."""
        return [s.to_list() for s in self.strokes]

    @classmethod
    def from_list(cls, lst: Sequence[Sequence[Sequence[float]]]) -> Drawing:
        """Create from nested lists ``[[[x, y], ...], ...]``.

        Raises:
            ValueError: If a stroke is empty or a point is not an (x, y) pair.
        """
        strokes = []
        for raw in lst:
            if not raw:
                raise ValueError("Strokes must contain at least one point")
            for p in raw:
                if not isinstance(p, (list, tuple)) or len(p) != 2:
                    raise ValueError(f"Invalid point {p!r}: expected [x, y]")
            strokes.append(Stroke.from_tuples(raw))
        return cls(tuple(strokes))
