"""Stroke capture.

StrokeCaptureEngine holds the drawing being written. CaptureChannel carries
begin/point/end events from any input source to the engine in order.

Example usage::

    from practice_lib.capture import CaptureChannel, StrokeCaptureEngine

    engine = StrokeCaptureEngine()
    channel = CaptureChannel()
    channel.begin(100, 100)
    channel.point(300, 300)
    channel.end()
    channel.drain(engine)
    drawing = engine.snapshot()
"""

from .engine import StrokeCaptureEngine
from .events import CaptureChannel, CaptureEvent, EventKind, apply_event

__all__ = [
    'StrokeCaptureEngine',
    'CaptureChannel', 'CaptureEvent', 'EventKind', 'apply_event',
]
