"""Unit tests for practice_lib.utils.rendering.

Tests rasterization of drawings, the preview renderer and the base64 PNG
transport used between the client and the evaluator.
"""

import base64
import io
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np
from PIL import Image

# Add parent dir to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from practice_lib.domain.geometry import Drawing, Point, Stroke
from practice_lib.errors import ImageDecodeError, RenderUnavailableError
from practice_lib.utils.rendering import (
    PREVIEW_BACKGROUND,
    decode_png,
    encode_png,
    ensure_render_environment,
    rasterize,
    render_preview,
)


def diagonal():
    return Drawing((Stroke.from_tuples([(0, 0), (400, 400)]),))


class TestRasterize(unittest.TestCase):
    """Tests for rasterize."""

    def test_shape_and_dtype(self):
        buffer = rasterize(diagonal())
        self.assertEqual(buffer.shape, (400, 400, 4))
        self.assertEqual(buffer.dtype, np.uint8)

    def test_custom_size(self):
        buffer = rasterize(diagonal(), 120, 80)
        self.assertEqual(buffer.shape, (80, 120, 4))

    def test_read_only(self):
        buffer = rasterize(diagonal())
        self.assertFalse(buffer.flags.writeable)

    def test_empty_drawing_returns_none(self):
        self.assertIsNone(rasterize(Drawing()))

    def test_idempotent(self):
        drawing = Drawing((
            Stroke.from_tuples([(50, 60), (200, 220), (330, 90)]),
            Stroke.from_tuples([(100, 300), (300, 300)]),
        ))
        self.assertTrue(np.array_equal(rasterize(drawing), rasterize(drawing)))

    def test_pixels_are_ink_or_background(self):
        buffer = rasterize(diagonal())
        self.assertTrue(set(np.unique(buffer[..., :3])) <= {0, 255})
        self.assertTrue(np.all(buffer[..., 3] == 255))

    def test_ink_follows_stroke(self):
        buffer = rasterize(diagonal())
        self.assertEqual(tuple(buffer[200, 200]), (255, 255, 255, 255))
        self.assertEqual(tuple(buffer[10, 390]), (0, 0, 0, 255))

    def test_round_caps(self):
        drawing = Drawing((Stroke.from_tuples([(100, 200), (300, 200)]),))
        buffer = rasterize(drawing)
        # Cap extends half the pen width beyond the endpoint
        self.assertEqual(buffer[200, 97, 0], 255)
        self.assertEqual(buffer[200, 90, 0], 0)

    def test_single_point_stroke_has_no_ink(self):
        drawing = Drawing((Stroke((Point(200, 200),)),))
        buffer = rasterize(drawing)
        self.assertIsNotNone(buffer)
        self.assertFalse(np.any(buffer[..., :3]))

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            rasterize(diagonal(), 0, 400)


class TestRenderPreview(unittest.TestCase):
    """Tests for render_preview."""

    def test_returns_rgba_image(self):
        img = render_preview(diagonal(), 200, 100)
        self.assertEqual(img.mode, 'RGBA')
        self.assertEqual(img.size, (200, 100))

    def test_grid_is_drawn(self):
        with_grid = render_preview(Drawing())
        without_grid = render_preview(Drawing(), grid=False)
        self.assertNotEqual(with_grid.getpixel((0, 200)), PREVIEW_BACKGROUND)
        self.assertEqual(without_grid.getpixel((0, 200)), PREVIEW_BACKGROUND)

    def test_ink_on_top_of_grid(self):
        img = render_preview(diagonal())
        self.assertEqual(img.getpixel((200, 200)), (255, 255, 255, 255))


class TestPngTransport(unittest.TestCase):
    """Tests for encode_png and decode_png."""

    def test_roundtrip_is_lossless(self):
        buffer = rasterize(diagonal())
        decoded = decode_png(encode_png(buffer))
        self.assertTrue(np.array_equal(buffer, decoded))
        self.assertFalse(decoded.flags.writeable)

    def test_accepts_data_url(self):
        buffer = rasterize(diagonal(), 40, 40)
        payload = 'data:image/png;base64,' + encode_png(buffer)
        self.assertTrue(np.array_equal(decode_png(payload), buffer))

    def test_converts_other_modes_to_rgba(self):
        buf = io.BytesIO()
        Image.new('L', (8, 6), 255).save(buf, format='PNG')
        decoded = decode_png(base64.b64encode(buf.getvalue()).decode('ascii'))
        self.assertEqual(decoded.shape, (6, 8, 4))
        self.assertEqual(tuple(decoded[0, 0]), (255, 255, 255, 255))

    def test_empty_payload(self):
        with self.assertRaises(ImageDecodeError):
            decode_png('')

    def test_invalid_base64(self):
        with self.assertRaises(ImageDecodeError):
            decode_png('not base64!')

    def test_not_an_image(self):
        payload = base64.b64encode(b'definitely not a png').decode('ascii')
        with self.assertRaises(ImageDecodeError):
            decode_png(payload)

    def test_accepts_line_wrapped_base64(self):
        buffer = rasterize(diagonal())
        buf = io.BytesIO()
        Image.fromarray(np.array(buffer)).save(buf, format='PNG')
        wrapped = base64.encodebytes(buf.getvalue()).decode('ascii')
        self.assertIn('\n', wrapped)
        self.assertTrue(np.array_equal(decode_png(wrapped), buffer))

    def test_decompression_bomb_is_decode_error(self):
        payload = encode_png(rasterize(diagonal(), 100, 100))
        with patch('PIL.Image.MAX_IMAGE_PIXELS', 1000):
            with self.assertRaises(ImageDecodeError):
                decode_png(payload)

    def test_rejects_oversized_image(self):
        buf = io.BytesIO()
        Image.new('RGBA', (2049, 1), (0, 0, 0, 255)).save(buf, format='PNG')
        payload = base64.b64encode(buf.getvalue()).decode('ascii')
        with self.assertRaises(ImageDecodeError):
            decode_png(payload)

    def test_custom_max_size(self):
        payload = encode_png(rasterize(diagonal(), 100, 100))
        self.assertEqual(decode_png(payload, max_size=100).shape, (100, 100, 4))
        with self.assertRaises(ImageDecodeError):
            decode_png(payload, max_size=99)


class TestRenderEnvironment(unittest.TestCase):
    """Tests for ensure_render_environment."""

    def test_available(self):
        ensure_render_environment()

    @patch('practice_lib.utils.rendering.features.check', return_value=False)
    def test_missing_zlib(self, mock_check):
        with self.assertRaises(RenderUnavailableError):
            ensure_render_environment()
        with self.assertRaises(RenderUnavailableError):
            encode_png(rasterize(diagonal(), 10, 10))


if __name__ == '__main__':
    unittest.main()
