"""Shared configuration for the character practice grader.

This module centralizes the constants used by:
    - practice_lib.utils.rendering (canvas and stroke appearance)
    - practice_lib.analysis.metrics (ink test, track and edge margins)
    - practice_lib.scoring.engine (weights, penalties and thresholds)
    - practice_lib.app / practice_lib.cli (locale, conversion service)

Having these values in one place keeps the rasterizer, the analyzer and
the scorer consistent with each other.
"""

from __future__ import annotations

from dataclasses import dataclass

# --- Canvas / rasterization ---
DEFAULT_CANVAS_SIZE = 400
MAX_CANVAS_SIZE = 2048     # largest side accepted from clients, raster or strokes
DEFAULT_STROKE_WIDTH = 10
BACKGROUND_COLOR = (0, 0, 0, 255)
INK_COLOR = (255, 255, 255, 255)

# Guide grid for the live preview only (never part of the evaluated raster)
GRID_COLOR = (100, 116, 139, 51)
GRID_BORDER_COLOR = (100, 116, 139, 77)
GRID_LINE_WIDTH = 2
GRID_DASH = (5, 10)

# --- Ink test ---
INK_ALPHA_THRESHOLD = 32   # alpha must be strictly above this
INK_SUM_THRESHOLD = 96     # r + g + b must be strictly above this

# --- Geometry of the guide ---
TRACK_MARGIN = 0.12        # fraction of width/height excluded on each side
EDGE_MARGIN = 2            # ink within this many pixels of a border touches it

# --- Scoring ---
COVERAGE_TARGET = 0.15
COVERAGE_WEIGHT = 45.0
SPAN_TARGET = 0.7
SPAN_WEIGHT = 35.0
BALANCE_WEIGHT = 20.0
OUTSIDE_TRACK_WEIGHT = 40.0
EDGE_PENALTY = 12.0
LEGACY_EDGE_PENALTY = 10.0
PASS_THRESHOLD = 60
ADVANCE_THRESHOLD = 80

# Suggestion triggers
MIN_COVERAGE = 0.03
MIN_SPAN = 0.45
MAX_OFFSET = 0.2
MAX_OUTSIDE_TRACK = 0.15

DEFAULT_LOCALE = 'zh-Hant'

# --- Practice deck ---
PRACTICE_CHARACTERS = (
    '一', '二', '三', '人', '大', '天', '口', '日',
    '月', '水', '火', '山', '中', '国', '上', '下',
)

# --- Character set conversion ---
CONVERT_URL = 'https://api.zhconvert.org/convert'
CONVERT_TIMEOUT = 10.0

# --- Background evaluation ---
EVALUATION_WORKERS = 2


@dataclass(frozen=True)
class EvaluatorConfig:
    """Configuration for the scoring engine.

    Two scoring variants exist. The track variant penalizes ink outside the
    centered guide track and subtracts 12 points for edge contact. The
    legacy variant has no track penalty and subtracts 10 points. Pick one
    explicitly with the constructors below.

    Attributes:
        coverage_target: Coverage ratio that earns the full coverage score.
        coverage_weight: Points awarded for full coverage.
        span_target: Average span that earns the full span score.
        span_weight: Points awarded for full span.
        balance_weight: Points awarded for a perfectly centered drawing.
        outside_track_weight: Points removed when all ink is off the track.
            Zero disables the track penalty and the track suggestion.
        edge_penalty: Points removed once when ink touches the border.
        pass_threshold: Minimum score for ``is_correct``.
        locale: Feedback phrase table to use.
    """
    coverage_target: float = COVERAGE_TARGET
    coverage_weight: float = COVERAGE_WEIGHT
    span_target: float = SPAN_TARGET
    span_weight: float = SPAN_WEIGHT
    balance_weight: float = BALANCE_WEIGHT
    outside_track_weight: float = OUTSIDE_TRACK_WEIGHT
    edge_penalty: float = EDGE_PENALTY
    pass_threshold: int = PASS_THRESHOLD
    locale: str = DEFAULT_LOCALE

    @property
    def models_track(self) -> bool:
        return self.outside_track_weight > 0

    @classmethod
    def track_variant(cls, locale: str = DEFAULT_LOCALE) -> EvaluatorConfig:
        """Track-aware scoring (the default)."""
        return cls(locale=locale)

    @classmethod
    def legacy_variant(cls, locale: str = DEFAULT_LOCALE) -> EvaluatorConfig:
        """Scoring without the outside-track penalty."""
        return cls(outside_track_weight=0.0, edge_penalty=LEGACY_EDGE_PENALTY,
                   locale=locale)
