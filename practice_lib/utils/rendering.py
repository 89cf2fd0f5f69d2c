"""Drawing rasterization and raster transport.

This module turns drawing snapshots into pixel buffers and moves pixel
buffers across process boundaries as base64 PNG payloads.

The module provides the following functions:
    rasterize: Render a drawing as an RGBA numpy buffer (evaluation path).
    render_preview: Render a drawing over the guide grid (display path).
    encode_png: Encode a pixel buffer as base64 PNG.
    decode_png: Decode a base64 PNG (or data URL) into a pixel buffer.
    ensure_render_environment: Check that Pillow can write PNG files.

The evaluation raster holds only ink and background. White ink on an
opaque black background, drawn without anti-aliasing so every pixel is
either full ink or full background.

Example usage:
    Rasterizing and shipping a drawing::

        from practice_lib.utils.rendering import rasterize, encode_png

        buffer = rasterize(drawing, 400, 400)
        if buffer is not None:
            payload = encode_png(buffer)
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, UnidentifiedImageError, features

from .. import config
from ..domain.geometry import Drawing, Point
from ..errors import ImageDecodeError, RenderUnavailableError

logger = logging.getLogger(__name__)

# Preview canvas colour (the guide grid sits on top of it)
PREVIEW_BACKGROUND = (31, 41, 55, 255)


def ensure_render_environment() -> None:
    """Fail fast if Pillow cannot produce lossless PNG output.

    Raises:
        RenderUnavailableError: If Pillow was built without zlib.
    """
    if not features.check('zlib'):
        raise RenderUnavailableError(
            "Pillow was built without zlib; PNG rasters are unavailable")


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")


def _draw_strokes(draw: ImageDraw.ImageDraw, drawing: Drawing,
                  stroke_width: int, fill: Tuple[int, int, int, int]) -> int:
    """Draw every visible stroke with round joins and caps.

    Returns:
        Number of strokes that produced ink.
    """
    radius = stroke_width / 2
    drawn = 0
    for stroke in drawing:
        # Single-point strokes are skipped rather than drawn as dots
        if not stroke.is_visible:
            continue
        xy = [p.to_tuple() for p in stroke]
        draw.line(xy, fill=fill, width=stroke_width, joint='curve')
        for cap in (stroke.start, stroke.end):
            draw.ellipse([cap.x - radius, cap.y - radius,
                          cap.x + radius, cap.y + radius], fill=fill)
        drawn += 1
    return drawn


def rasterize(drawing: Drawing, width: int = config.DEFAULT_CANVAS_SIZE,
              height: int = config.DEFAULT_CANVAS_SIZE,
              stroke_width: int = config.DEFAULT_STROKE_WIDTH) -> Optional[np.ndarray]:
    """Render a drawing snapshot to a fixed-size RGBA buffer.

    Args:
        drawing: Snapshot to render. Points outside the canvas are clipped
            by the renderer.
        width: Buffer width in pixels.
        height: Buffer height in pixels.
        stroke_width: Pen width in pixels.

    Returns:
        Read-only uint8 array of shape (height, width, 4), or None if the
        drawing has no strokes at all.

    Raises:
        ValueError: If width or height is not positive.
    """
    _check_size(width, height)
    if drawing.is_empty:
        return None

    img = Image.new('RGBA', (width, height), config.BACKGROUND_COLOR)
    draw = ImageDraw.Draw(img)
    drawn = _draw_strokes(draw, drawing, stroke_width, config.INK_COLOR)
    logger.debug("Rasterized %d/%d strokes at %dx%d",
                 drawn, len(drawing), width, height)

    buffer = np.array(img, dtype=np.uint8)
    buffer.setflags(write=False)
    return buffer


def _dashed_line(draw: ImageDraw.ImageDraw, start: Point, end: Point,
                 dash: Sequence[int], fill, width: int) -> None:
    """Draw a dashed straight line (Pillow has no native dash support)."""
    length = start.distance_to(end)
    if length == 0:
        return
    ux = (end.x - start.x) / length
    uy = (end.y - start.y) / length
    on, off = dash
    pos = 0.0
    while pos < length:
        seg_end = min(pos + on, length)
        draw.line([(start.x + ux * pos, start.y + uy * pos),
                   (start.x + ux * seg_end, start.y + uy * seg_end)],
                  fill=fill, width=width)
        pos += on + off


def _draw_grid(img: Image.Image) -> Image.Image:
    """Composite the guide grid (axes, diagonals, border) onto ``img``."""
    w, h = img.size
    overlay = Image.new('RGBA', (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    lines = [
        (Point(w / 2, 0), Point(w / 2, h)),
        (Point(0, h / 2), Point(w, h / 2)),
        (Point(0, 0), Point(w, h)),
        (Point(w, 0), Point(0, h)),
    ]
    for start, end in lines:
        _dashed_line(draw, start, end, config.GRID_DASH,
                     config.GRID_COLOR, config.GRID_LINE_WIDTH)

    draw.rectangle([0, 0, w - 1, h - 1], outline=config.GRID_BORDER_COLOR,
                   width=config.GRID_LINE_WIDTH)
    return Image.alpha_composite(img, overlay)


def render_preview(drawing: Drawing, width: int = config.DEFAULT_CANVAS_SIZE,
                   height: int = config.DEFAULT_CANVAS_SIZE,
                   stroke_width: int = config.DEFAULT_STROKE_WIDTH,
                   grid: bool = True) -> Image.Image:
    """Render a drawing for display, with the guide grid underneath.

    This is the live-feedback path. Its output must never be evaluated:
    grid pixels would be counted as ink.
    """
    _check_size(width, height)
    img = Image.new('RGBA', (width, height), PREVIEW_BACKGROUND)
    if grid:
        img = _draw_grid(img)
    _draw_strokes(ImageDraw.Draw(img), drawing, stroke_width, config.INK_COLOR)
    return img


def encode_png(buffer: np.ndarray) -> str:
    """Encode an RGBA buffer as a base64 PNG string (no data URL prefix).

    Raises:
        RenderUnavailableError: If PNG output is not supported.
    """
    ensure_render_environment()
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8)).save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode('ascii')


def decode_png(payload: str, max_size: int = config.MAX_CANVAS_SIZE) -> np.ndarray:
    """Decode a base64 image payload into a read-only RGBA buffer.

    Accepts bare or line-wrapped base64, or a ``data:image/png;base64,``
    URL. Any image mode Pillow understands is converted to RGBA.

    Args:
        payload: Encoded image.
        max_size: Largest width or height accepted. Checked from the image
            header, before any pixel data is decoded.

    Raises:
        ImageDecodeError: If the payload is not valid base64, not an image,
            or larger than ``max_size`` on either side.
    """
    if not isinstance(payload, str) or not payload:
        raise ImageDecodeError("Image payload is empty")
    if payload.startswith('data:'):
        _, _, payload = payload.partition(',')
    payload = ''.join(payload.split())

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Image payload is not valid base64: {e}") from e

    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            if width > max_size or height > max_size:
                raise ImageDecodeError(
                    f"Image is {width}x{height}; the largest accepted side is {max_size}")
            img.load()
            rgba = img.convert('RGBA')
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to load drawing for analysis: {e}") from e

    width, height = rgba.size
    if width == 0 or height == 0:
        raise ImageDecodeError("Decoded image has no pixels")

    buffer = np.array(rgba, dtype=np.uint8)
    buffer.setflags(write=False)
    return buffer

