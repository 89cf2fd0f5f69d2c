"""Scoring of analyzed drawings.

Classes:
    ScoringEngine: Metrics + target character -> EvaluationResult.
    CompositeScorer: Sums score components and subtracts penalties.
    CoverageScore, SpanScore, BalanceScore: Point-awarding components.
    OutsideTrackPenalty, EdgeContactPenalty: Point-removing penalties.
    FeedbackPhrases: Localized labels and sentences.

Functions:
    score: Score metrics with a one-off engine.
    clamp: Limit a value to an interval.
    get_phrases: Phrase table for a locale.
"""

from .engine import (
    BalanceScore,
    CompositeScorer,
    CoverageScore,
    EdgeContactPenalty,
    OutsideTrackPenalty,
    ScoreComponent,
    ScoringEngine,
    ScoringPenalty,
    SpanScore,
    clamp,
    round_half_up,
    score,
)
from .feedback import PHRASES, SUGGESTION_KEYS, FeedbackPhrases, get_phrases

__all__ = [
    'ScoringEngine', 'CompositeScorer', 'score', 'clamp', 'round_half_up',
    'ScoreComponent', 'CoverageScore', 'SpanScore', 'BalanceScore',
    'ScoringPenalty', 'OutsideTrackPenalty', 'EdgeContactPenalty',
    'FeedbackPhrases', 'PHRASES', 'SUGGESTION_KEYS', 'get_phrases',
]
