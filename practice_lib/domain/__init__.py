"""Domain objects for character practice.

This module provides the value objects passed between the capture engine,
the rasterizer, the metrics analyzer and the scoring engine.

Geometry classes:
    Point: Immutable 2D point in canvas pixel space.
    Stroke: Immutable ordered sequence of points (one pointer gesture).
    Drawing: Immutable ordered sequence of strokes (one attempt).

Result classes:
    DrawingMetrics: Ink statistics computed from a raster.
    EvaluationResult: Score, correctness and feedback for a drawing.

Example usage:
    Building a drawing by hand::

        from practice_lib.domain import Drawing, Stroke

        drawing = Drawing((
            Stroke.from_tuples([(50, 200), (350, 200)]),
        ))
        print(drawing.point_count)
"""

from .geometry import Drawing, Point, Stroke
from .results import DrawingMetrics, EvaluationResult

__all__ = [
    'Point', 'Stroke', 'Drawing',
    'DrawingMetrics', 'EvaluationResult',
]
