"""API layer for character practice.

This module provides the service layer used by the web routes and the
command line. The services hide the capture, rendering, analysis and
scoring steps behind a few calls.

The module exports:
    EvaluationService: Decode, analyze and score drawings.
    PracticeSession: Explicit state for one attempt at one character.
    CharacterDeck: Ordered practice list with selection and merging.
    evaluate: One-off ``evaluate(encoded_image, character)``.
    extract_han_characters: Clean recognized text into practice characters.
    should_advance: Gate for moving on to the next character.
    convert_character_set: Traditional/simplified conversion client.

Example usage::

    from practice_lib.api import EvaluationService, PracticeSession

    service = EvaluationService()
    session = PracticeSession('山')
    session.engine.begin_stroke((120, 80))
    session.engine.extend_stroke((120, 320))
    session.engine.end_stroke()
    print(session.evaluate(service).feedback)
"""

from .conversion import convert_character_set
from .services import (
    CharacterDeck,
    EvaluationService,
    PracticeSession,
    evaluate,
    extract_han_characters,
    should_advance,
)

__all__ = [
    'EvaluationService', 'PracticeSession', 'CharacterDeck',
    'evaluate', 'extract_han_characters', 'should_advance',
    'convert_character_set',
]
