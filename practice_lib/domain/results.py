"""Value objects produced by the evaluation pipeline."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class DrawingMetrics:
    """Ink statistics for one raster.

    Only valid for the pixel buffer it was computed from. When ``has_ink``
    is False every numeric field is zero.

    Attributes:
        has_ink: True if at least one pixel passed the ink test.
        coverage: Fraction of all pixels that are ink, in [0, 1].
        span_x: Width of the ink bounding box over canvas width.
        span_y: Height of the ink bounding box over canvas height.
        offset_x: Horizontal centroid distance from the center, normalized
            by half the width.
        offset_y: Vertical counterpart of ``offset_x``.
        touches_edge: True if ink comes within the edge margin of a border.
        outside_track_ratio: Fraction of ink pixels outside the guide track.
    """
    has_ink: bool
    coverage: float = 0.0
    span_x: float = 0.0
    span_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    touches_edge: bool = False
    outside_track_ratio: float = 0.0

    @classmethod
    def empty(cls) -> DrawingMetrics:
        """The canonical no-ink result."""
        return cls(has_ink=False)

    @property
    def span_average(self) -> float:
        return (self.span_x + self.span_y) / 2

    @property
    def offset_average(self) -> float:
        return (self.offset_x + self.offset_y) / 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hasInk': self.has_ink,
            'coverage': self.coverage,
            'spanX': self.span_x,
            'spanY': self.span_y,
            'offsetX': self.offset_x,
            'offsetY': self.offset_y,
            'touchesEdge': self.touches_edge,
            'outsideTrackRatio': self.outside_track_ratio,
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Score and feedback for one submitted drawing."""
    identified_character: str
    is_correct: bool
    score: int
    feedback: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape returned by the API."""
        return {
            'identifiedCharacter': self.identified_character,
            'isCorrect': self.is_correct,
            'score': self.score,
            'feedback': self.feedback,
        }
