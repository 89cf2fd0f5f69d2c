"""Utility functions for practice drawings.

Rendering utilities:
    rasterize: Render a drawing snapshot as an RGBA pixel buffer.
    render_preview: Render a drawing over the guide grid for display.
    encode_png: Encode a pixel buffer as a base64 PNG payload.
    decode_png: Decode a base64 PNG payload into a pixel buffer.
    ensure_render_environment: Fail fast without PNG support.

Example usage::

    from practice_lib.utils import rasterize, encode_png, decode_png

    buffer = rasterize(drawing, 400, 400)
    assert (decode_png(encode_png(buffer)) == buffer).all()
"""

from .rendering import (
    decode_png,
    encode_png,
    ensure_render_environment,
    rasterize,
    render_preview,
)

__all__ = [
    'rasterize', 'render_preview',
    'encode_png', 'decode_png', 'ensure_render_environment',
]
