"""Raster analysis for practice drawings.

This module exports the metrics analyzer that turns a rasterized drawing
into the statistics the scoring engine consumes.

Classes:
    MetricsAnalyzer: Configurable ink statistics over RGBA buffers.

Functions:
    analyze: Analyze a buffer with the default thresholds.
    ink_mask: Boolean ink classification of every pixel.
    track_axis: Inside-track flags for one axis.

Example usage::

    from practice_lib.analysis import MetricsAnalyzer

    analyzer = MetricsAnalyzer(track_margin=0.12)
    metrics = analyzer.analyze(buffer, tile_rows=64)
"""

from .metrics import MetricsAnalyzer, analyze, ink_mask, track_axis

__all__ = ['MetricsAnalyzer', 'analyze', 'ink_mask', 'track_axis']
