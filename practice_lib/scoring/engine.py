"""Heuristic scoring of drawing metrics.

This module maps a DrawingMetrics value to a 0-100 score, a pass/fail flag,
an identified-character label and one feedback sentence.

The score is built with the Composite Scoring Pattern: positive
ScoreComponent instances award points, ScoringPenalty instances remove
them, and CompositeScorer adds everything up. With the default
configuration:

    coverage  clamp(coverage / 0.15, 0, 1) * 45
    span      clamp(span_average / 0.7, 0, 1) * 35
    balance   clamp(1 - offset_average, 0, 1) * 20
    track     -clamp(outside_track_ratio, 0, 1) * 40
    edge      -12 once if any ink touches the border

The raw total is clamped to [0, 100] and rounded half up. A score of 60
or more passes.

Typical usage:
    from practice_lib.scoring import ScoringEngine

    engine = ScoringEngine()
    result = engine.score(metrics, '山')
    print(result.score, result.feedback)
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Optional

from .. import config
from ..config import EvaluatorConfig
from ..domain.results import DrawingMetrics, EvaluationResult
from .feedback import FeedbackPhrases, get_phrases

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    """Limit ``value`` to the closed interval [lo, hi]."""
    return min(max(value, lo), hi)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Composite Scoring Pattern
# ---------------------------------------------------------------------------

class ScoreComponent(ABC):
    """Base class for point-awarding score components.

    Attributes:
        weight: Points awarded when the component is fully satisfied.
    """

    def __init__(self, weight: float):
        self.weight = weight

    @abstractmethod
    def compute(self, metrics: DrawingMetrics) -> float:
        """Return the points earned, between 0 and ``weight``."""


class CoverageScore(ScoreComponent):
    """Rewards ink coverage up to ``target``."""

    def __init__(self, weight: float = config.COVERAGE_WEIGHT,
                 target: float = config.COVERAGE_TARGET):
        super().__init__(weight)
        self.target = target

    def compute(self, metrics: DrawingMetrics) -> float:
        return clamp(metrics.coverage / self.target, 0, 1) * self.weight


class SpanScore(ScoreComponent):
    """Rewards a bounding box that fills the guide."""

    def __init__(self, weight: float = config.SPAN_WEIGHT,
                 target: float = config.SPAN_TARGET):
        super().__init__(weight)
        self.target = target

    def compute(self, metrics: DrawingMetrics) -> float:
        return clamp(metrics.span_average / self.target, 0, 1) * self.weight


class BalanceScore(ScoreComponent):
    """Rewards a centroid close to the canvas center."""

    def __init__(self, weight: float = config.BALANCE_WEIGHT):
        super().__init__(weight)

    def compute(self, metrics: DrawingMetrics) -> float:
        return clamp(1 - metrics.offset_average, 0, 1) * self.weight


class ScoringPenalty(ABC):
    """Base class for point-removing penalties.

    Attributes:
        weight: Points removed at full severity.
    """

    def __init__(self, weight: float):
        self.weight = weight

    @abstractmethod
    def compute(self, metrics: DrawingMetrics) -> float:
        """Return the points to subtract (0 = no penalty)."""


class OutsideTrackPenalty(ScoringPenalty):
    """Penalty proportional to the share of ink outside the guide track."""

    def __init__(self, weight: float = config.OUTSIDE_TRACK_WEIGHT):
        super().__init__(weight)

    def compute(self, metrics: DrawingMetrics) -> float:
        return clamp(metrics.outside_track_ratio, 0, 1) * self.weight


class EdgeContactPenalty(ScoringPenalty):
    """Fixed penalty, applied once, when ink touches the border."""

    def __init__(self, weight: float = config.EDGE_PENALTY):
        super().__init__(weight)

    def compute(self, metrics: DrawingMetrics) -> float:
        return self.weight if metrics.touches_edge else 0.0


class CompositeScorer:
    """Adds score components and subtracts penalties.

    Example:
        >>> scorer = CompositeScorer(
        ...     components=[CoverageScore(), SpanScore(), BalanceScore()],
        ...     penalties=[EdgeContactPenalty(weight=10)],
        ... )
        >>> raw = scorer.raw_score(metrics)
    """

    def __init__(self, components: List[ScoreComponent],
                 penalties: Optional[List[ScoringPenalty]] = None):
        self.components = components
        self.penalties = penalties or []

    def raw_score(self, metrics: DrawingMetrics) -> float:
        """Unclamped total of components minus penalties."""
        earned = sum(c.compute(metrics) for c in self.components)
        lost = sum(p.compute(metrics) for p in self.penalties)
        return earned - lost

    def score(self, metrics: DrawingMetrics) -> int:
        """Final integer score in [0, 100]."""
        return round_half_up(clamp(self.raw_score(metrics), 0, 100))

    @classmethod
    def from_config(cls, cfg: EvaluatorConfig) -> CompositeScorer:
        penalties: List[ScoringPenalty] = []
        if cfg.models_track:
            penalties.append(OutsideTrackPenalty(cfg.outside_track_weight))
        penalties.append(EdgeContactPenalty(cfg.edge_penalty))
        return cls(
            components=[
                CoverageScore(cfg.coverage_weight, cfg.coverage_target),
                SpanScore(cfg.span_weight, cfg.span_target),
                BalanceScore(cfg.balance_weight),
            ],
            penalties=penalties,
        )


# ---------------------------------------------------------------------------
# Scoring engine
# ---------------------------------------------------------------------------

class ScoringEngine:
    """Turns DrawingMetrics into an EvaluationResult.

    Attributes:
        config: EvaluatorConfig with weights, thresholds and locale.
        scorer: CompositeScorer built from the config.
        phrases: Feedback phrase table for the configured locale.
    """

    def __init__(self, cfg: Optional[EvaluatorConfig] = None):
        self.config = cfg or EvaluatorConfig.track_variant()
        self.scorer = CompositeScorer.from_config(self.config)
        self.phrases: FeedbackPhrases = get_phrases(self.config.locale)

    def suggestions(self, metrics: DrawingMetrics) -> List[str]:
        """Suggestion keys for ``metrics`` in their fixed order."""
        keys = []
        if metrics.coverage < config.MIN_COVERAGE:
            keys.append('coverage')
        if metrics.span_average < config.MIN_SPAN:
            keys.append('span')
        if metrics.offset_average > config.MAX_OFFSET:
            keys.append('offset')
        if metrics.touches_edge:
            keys.append('edge')
        if self.config.models_track and metrics.outside_track_ratio > config.MAX_OUTSIDE_TRACK:
            keys.append('track')
        return keys

    def feedback(self, keys: List[str], character: str) -> str:
        """Build the single feedback sentence for the given suggestion keys."""
        if not keys:
            return self.phrases.praise.format(character=character)
        joined = self.phrases.join(self.phrases.phrases_for(keys))
        return self.phrases.advice.format(suggestions=joined, character=character)

    def score(self, metrics: DrawingMetrics, character: str) -> EvaluationResult:
        """Score a drawing of ``character`` from its metrics."""
        if not metrics.has_ink:
            return EvaluationResult(
                identified_character=self.phrases.no_ink_label,
                is_correct=False,
                score=0,
                feedback=self.phrases.no_ink_prompt.format(character=character),
            )

        score = self.scorer.score(metrics)
        is_correct = score >= self.config.pass_threshold
        keys = self.suggestions(metrics)
        logger.debug("Scored %r: %d (suggestions=%s)", character, score, keys)

        return EvaluationResult(
            identified_character=character if is_correct else self.phrases.unclear_label,
            is_correct=is_correct,
            score=score,
            feedback=self.feedback(keys, character),
        )


def score(metrics: DrawingMetrics, character: str,
          cfg: Optional[EvaluatorConfig] = None) -> EvaluationResult:
    """Score ``metrics`` with a one-off engine."""
    return ScoringEngine(cfg).score(metrics, character)
