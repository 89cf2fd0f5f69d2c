"""Ink statistics for rasterized drawings.

The analyzer classifies every pixel of an RGBA buffer as ink or
background and reduces the ink pixels to a DrawingMetrics value: coverage,
bounding-box span, centroid offset, edge contact and the share of ink
outside the centered guide track.

A pixel is ink when its alpha is above 32 and its r+g+b sum is above 96.
This accepts solid white strokes and tolerates compositing noise without
requiring exact colour equality.

The statistics are plain sums, counts and min/max values, so the buffer can
be split into horizontal bands that are analyzed independently and reduced
afterwards. All sums are kept as integers, which makes the banded result
identical to a single pass.

Example usage::

    from practice_lib.analysis import analyze

    metrics = analyze(buffer)
    if metrics.has_ink:
        print(f"coverage={metrics.coverage:.3f}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .. import config
from ..domain.results import DrawingMetrics

logger = logging.getLogger(__name__)


def _check_buffer(buffer: np.ndarray) -> None:
    if buffer.ndim != 3 or buffer.shape[2] != 4:
        raise ValueError(f"Expected an RGBA buffer of shape (h, w, 4), got {buffer.shape}")
    if buffer.shape[0] == 0 or buffer.shape[1] == 0:
        raise ValueError("Buffer has no pixels")


def ink_mask(buffer: np.ndarray,
             alpha_threshold: int = config.INK_ALPHA_THRESHOLD,
             sum_threshold: int = config.INK_SUM_THRESHOLD) -> np.ndarray:
    """Classify pixels as ink.

    Args:
        buffer: uint8 array of shape (h, w, 4) in RGBA order.
        alpha_threshold: Alpha must be strictly greater than this.
        sum_threshold: r + g + b must be strictly greater than this.

    Returns:
        Boolean array of shape (h, w); True where the pixel is ink.
    """
    _check_buffer(buffer)
    # Widen before summing so 255 + 255 + 255 does not wrap around
    rgb_sum = buffer[..., :3].astype(np.int32).sum(axis=2)
    return (buffer[..., 3] > alpha_threshold) & (rgb_sum > sum_threshold)


def track_axis(size: int, margin: float = config.TRACK_MARGIN) -> np.ndarray:
    """Per-index flags for pixels whose center lies inside the track.

    A pixel index ``i`` is inside when ``margin <= (i + 0.5) / size <= 1 - margin``.
    """
    normalized = (np.arange(size) + 0.5) / size
    return (normalized >= margin) & (normalized <= 1 - margin)


@dataclass
class _BandStats:
    """Partial ink statistics for one band of rows."""
    ink: int = 0
    outside: int = 0
    sum_x: int = 0
    sum_y: int = 0
    min_x: Optional[int] = None
    min_y: Optional[int] = None
    max_x: Optional[int] = None
    max_y: Optional[int] = None

    def merge(self, other: _BandStats) -> _BandStats:
        if other.ink == 0:
            return self
        if self.ink == 0:
            return other
        return _BandStats(
            ink=self.ink + other.ink,
            outside=self.outside + other.outside,
            sum_x=self.sum_x + other.sum_x,
            sum_y=self.sum_y + other.sum_y,
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )


class MetricsAnalyzer:
    """Computes DrawingMetrics from RGBA pixel buffers.

    Attributes:
        track_margin: Fraction of width/height on each side that lies
            outside the guide track.
        edge_margin: Ink within this many pixels of a border counts as
            touching it.
        alpha_threshold: Ink test alpha threshold.
        sum_threshold: Ink test r+g+b threshold.
    """

    def __init__(self, track_margin: float = config.TRACK_MARGIN,
                 edge_margin: int = config.EDGE_MARGIN,
                 alpha_threshold: int = config.INK_ALPHA_THRESHOLD,
                 sum_threshold: int = config.INK_SUM_THRESHOLD):
        self.track_margin = track_margin
        self.edge_margin = edge_margin
        self.alpha_threshold = alpha_threshold
        self.sum_threshold = sum_threshold

    def _band_stats(self, band: np.ndarray, row_offset: int,
                    inside_x: np.ndarray, inside_y: np.ndarray) -> _BandStats:
        mask = ink_mask(band, self.alpha_threshold, self.sum_threshold)
        ys, xs = np.nonzero(mask)
        if len(xs) == 0:
            return _BandStats()
        ys = ys + row_offset
        inside = inside_x[xs] & inside_y[ys]
        return _BandStats(
            ink=int(len(xs)),
            outside=int(np.count_nonzero(~inside)),
            sum_x=int(xs.sum(dtype=np.int64)),
            sum_y=int(ys.sum(dtype=np.int64)),
            min_x=int(xs.min()),
            min_y=int(ys.min()),
            max_x=int(xs.max()),
            max_y=int(ys.max()),
        )

    def analyze(self, buffer: np.ndarray, tile_rows: Optional[int] = None) -> DrawingMetrics:
        """Compute ink statistics for ``buffer``.

        Args:
            buffer: uint8 RGBA array of shape (h, w, 4).
            tile_rows: If given, analyze bands of this many rows separately
                and reduce the partial results. The output does not depend
                on the band size.

        Returns:
            DrawingMetrics for the buffer. ``DrawingMetrics.empty()`` when
            no pixel is ink.

        Raises:
            ValueError: If the buffer shape is not (h, w, 4) or tile_rows
                is not positive.
        """
        _check_buffer(buffer)
        height, width = buffer.shape[:2]
        if tile_rows is None:
            tile_rows = height
        elif tile_rows <= 0:
            raise ValueError(f"tile_rows must be positive, got {tile_rows}")

        inside_x = track_axis(width, self.track_margin)
        inside_y = track_axis(height, self.track_margin)

        bands: List[_BandStats] = [
            self._band_stats(buffer[top:top + tile_rows], top, inside_x, inside_y)
            for top in range(0, height, tile_rows)
        ]
        stats = _BandStats()
        for band in bands:
            stats = stats.merge(band)

        if stats.ink == 0:
            logger.debug("No ink in %dx%d buffer", width, height)
            return DrawingMetrics.empty()

        total = width * height
        center_x = (stats.sum_x + 0.5 * stats.ink) / stats.ink
        center_y = (stats.sum_y + 0.5 * stats.ink) / stats.ink
        margin = self.edge_margin - 1
        touches_edge = (stats.min_x <= margin or stats.min_y <= margin or
                        stats.max_x >= width - 1 - margin or
                        stats.max_y >= height - 1 - margin)

        metrics = DrawingMetrics(
            has_ink=True,
            coverage=stats.ink / total,
            span_x=(stats.max_x - stats.min_x + 1) / width,
            span_y=(stats.max_y - stats.min_y + 1) / height,
            offset_x=abs(center_x - width / 2) / (width / 2),
            offset_y=abs(center_y - height / 2) / (height / 2),
            touches_edge=touches_edge,
            outside_track_ratio=stats.outside / stats.ink,
        )
        logger.debug("Analyzed %dx%d buffer in %d band(s): %s",
                     width, height, len(bands), metrics)
        return metrics


_default_analyzer = MetricsAnalyzer()


def analyze(buffer: np.ndarray, tile_rows: Optional[int] = None) -> DrawingMetrics:
    """Analyze ``buffer`` with the default thresholds and margins."""
    return _default_analyzer.analyze(buffer, tile_rows=tile_rows)
