"""Unit tests for stroke capture.

Tests the StrokeCaptureEngine (begin/extend/end, undo, clear, snapshot)
and the CaptureChannel event queue that feeds it.
"""

import sys
import unittest
from pathlib import Path

# Add parent dir to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from practice_lib.capture import (
    CaptureChannel,
    CaptureEvent,
    EventKind,
    StrokeCaptureEngine,
    apply_event,
)
from practice_lib.domain.geometry import Drawing, Point


def draw_line(engine, start, end):
    engine.begin_stroke(start)
    engine.extend_stroke(end)
    engine.end_stroke()


class TestStrokeCaptureEngine(unittest.TestCase):
    """Tests for StrokeCaptureEngine."""

    def setUp(self):
        self.engine = StrokeCaptureEngine()

    def test_new_engine_is_empty(self):
        self.assertTrue(self.engine.is_empty)
        self.assertFalse(self.engine.is_drawing)
        self.assertEqual(self.engine.snapshot(), Drawing())

    def test_begin_extend_end(self):
        self.engine.begin_stroke((10, 10))
        self.assertTrue(self.engine.is_drawing)
        self.engine.extend_stroke(Point(20, 20))
        self.engine.extend_stroke((30, 30))
        self.engine.end_stroke()

        self.assertFalse(self.engine.is_drawing)
        drawing = self.engine.snapshot()
        self.assertEqual(len(drawing), 1)
        self.assertEqual(drawing[0].to_list(),
                         [[10.0, 10.0], [20.0, 20.0], [30.0, 30.0]])

    def test_extend_without_stroke_is_ignored(self):
        self.engine.extend_stroke((5, 5))
        self.assertTrue(self.engine.is_empty)

    def test_points_outside_canvas_are_kept(self):
        draw_line(self.engine, (-50, -50), (900, 900))
        self.assertEqual(self.engine.snapshot()[0].start, Point(-50, -50))

    def test_undo_removes_last_stroke(self):
        draw_line(self.engine, (0, 0), (10, 10))
        draw_line(self.engine, (20, 20), (30, 30))

        self.engine.undo()

        drawing = self.engine.snapshot()
        self.assertEqual(len(drawing), 1)
        self.assertEqual(drawing[0].start, Point(0, 0))

    def test_undo_everything_is_empty(self):
        draw_line(self.engine, (0, 0), (10, 10))
        self.engine.undo()
        self.assertTrue(self.engine.is_empty)

    def test_undo_on_empty_is_noop(self):
        self.engine.undo()
        self.assertTrue(self.engine.is_empty)

    def test_undo_closes_open_gesture(self):
        self.engine.begin_stroke((0, 0))
        self.engine.undo()
        self.assertFalse(self.engine.is_drawing)

    def test_clear(self):
        draw_line(self.engine, (0, 0), (10, 10))
        draw_line(self.engine, (20, 20), (30, 30))
        self.engine.clear()
        self.assertTrue(self.engine.is_empty)
        self.assertEqual(self.engine.stroke_count, 0)

    def test_snapshot_is_detached(self):
        draw_line(self.engine, (0, 0), (10, 10))
        snapshot = self.engine.snapshot()

        self.engine.begin_stroke((50, 50))
        self.engine.extend_stroke((60, 60))

        self.assertEqual(len(snapshot), 1)
        self.assertEqual(snapshot.point_count, 2)
        self.assertNotEqual(snapshot, self.engine.snapshot())


class TestCaptureEvent(unittest.TestCase):
    """Tests for CaptureEvent.from_dict."""

    def test_parse_events(self):
        begin = CaptureEvent.from_dict({'type': 'begin', 'x': 1, 'y': 2})
        self.assertEqual(begin, CaptureEvent(EventKind.BEGIN, Point(1, 2)))
        end = CaptureEvent.from_dict({'type': 'end'})
        self.assertIsNone(end.point)

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            CaptureEvent.from_dict({'type': 'hover', 'x': 1, 'y': 2})

    def test_missing_coordinates(self):
        with self.assertRaises(ValueError):
            CaptureEvent.from_dict({'type': 'point', 'x': 1})


class TestCaptureChannel(unittest.TestCase):
    """Tests for CaptureChannel."""

    def test_drain_applies_in_order(self):
        channel = CaptureChannel()
        channel.begin(0, 0)
        channel.point(5, 5)
        channel.point(10, 10)
        channel.end()
        channel.begin(20, 0)
        channel.point(20, 10)
        channel.end()
        self.assertEqual(len(channel), 7)

        engine = StrokeCaptureEngine()
        applied = channel.drain(engine)

        self.assertEqual(applied, 7)
        self.assertEqual(len(channel), 0)
        drawing = engine.snapshot()
        self.assertEqual(drawing.to_list(), [
            [[0.0, 0.0], [5.0, 5.0], [10.0, 10.0]],
            [[20.0, 0.0], [20.0, 10.0]],
        ])

    def test_point_without_begin_is_hover(self):
        engine = StrokeCaptureEngine()
        draw_line(engine, (0, 0), (10, 10))

        apply_event(engine, CaptureEvent(EventKind.POINT, Point(99, 99)))

        self.assertEqual(engine.snapshot()[0].end, Point(10, 10))

    def test_drain_empty_channel(self):
        self.assertEqual(CaptureChannel().drain(StrokeCaptureEngine()), 0)


if __name__ == '__main__':
    unittest.main()
