"""Ordered channel of capture events.

Input handlers (mouse, touch, stylus, a websocket, a test) only need to
translate their device events into canvas coordinates and push them onto a
CaptureChannel. The channel is drained into a StrokeCaptureEngine in
arrival order, so the engine never sees device objects.

Example:
    >>> channel = CaptureChannel()
    >>> channel.begin(10, 10)
    >>> channel.point(40, 40)
    >>> channel.end()
    >>> engine = StrokeCaptureEngine()
    >>> channel.drain(engine)
    3
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..domain.geometry import Point
from .engine import StrokeCaptureEngine

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Kinds of capture events."""
    BEGIN = 'begin'
    POINT = 'point'
    END = 'end'


@dataclass(frozen=True)
class CaptureEvent:
    """A single capture event.

    Attributes:
        kind: What happened.
        point: Canvas position for BEGIN and POINT, None for END.
    """
    kind: EventKind
    point: Optional[Point] = None

    @classmethod
    def from_dict(cls, d: dict) -> CaptureEvent:
        """Create from ``{'type': 'begin'|'point'|'end', 'x': .., 'y': ..}``.

        Raises:
            ValueError: If the type is unknown or coordinates are missing.
        """
        kind = EventKind(d.get('type'))
        if kind is EventKind.END:
            return cls(kind)
        if 'x' not in d or 'y' not in d:
            raise ValueError(f"{kind.value} event requires x and y")
        return cls(kind, Point(float(d['x']), float(d['y'])))


def apply_event(engine: StrokeCaptureEngine, event: CaptureEvent) -> None:
    """Apply one event to the engine."""
    if event.kind is EventKind.BEGIN:
        engine.begin_stroke(event.point)
    elif event.kind is EventKind.POINT:
        # A move without an open gesture is a hover, not ink
        if engine.is_drawing:
            engine.extend_stroke(event.point)
    else:
        engine.end_stroke()


class CaptureChannel:
    """FIFO of capture events feeding a single capture engine."""

    def __init__(self):
        self._queue: queue.Queue[CaptureEvent] = queue.Queue()

    def __len__(self) -> int:
        return self._queue.qsize()

    def put(self, event: CaptureEvent) -> None:
        self._queue.put(event)

    def begin(self, x: float, y: float) -> None:
        self.put(CaptureEvent(EventKind.BEGIN, Point(x, y)))

    def point(self, x: float, y: float) -> None:
        self.put(CaptureEvent(EventKind.POINT, Point(x, y)))

    def end(self) -> None:
        self.put(CaptureEvent(EventKind.END))

    def drain(self, engine: StrokeCaptureEngine) -> int:
        """Apply every pending event to ``engine`` in arrival order.

        Returns:
            Number of events applied.
        """
        applied = 0
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            apply_event(engine, event)
            applied += 1
        if applied:
            logger.debug("Applied %d capture events (%d strokes)",
                         applied, engine.stroke_count)
        return applied
