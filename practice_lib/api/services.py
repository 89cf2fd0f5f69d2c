"""Service layer for character practice.

This module wires the capture, rendering, analysis and scoring packages
into the entry points used by the web API and the command line.

The module contains:
    EvaluationService: ``evaluate(encoded_image, character)`` plus drawing
        and background variants.
    PracticeSession: Explicit per-attempt state (target character, capture
        engine, canvas size, last result).
    CharacterDeck: Ordered list of characters being practiced.
    extract_han_characters: Post-processing for recognized text.
    should_advance: Gate for moving on to the next character.

Example usage:
    Grading a PNG payload::

        from practice_lib.api.services import EvaluationService

        service = EvaluationService()
        result = service.evaluate(payload, '山')
        print(result.to_dict())

    Driving a session::

        session = PracticeSession('山')
        session.engine.begin_stroke((100, 100))
        session.engine.extend_stroke((300, 300))
        session.engine.end_stroke()
        future = session.submit(service)
        print(future.result().score)
"""

from __future__ import annotations

import logging
import threading
import unicodedata
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

import numpy as np

from .. import config
from ..analysis.metrics import MetricsAnalyzer
from ..capture.engine import StrokeCaptureEngine
from ..config import EvaluatorConfig
from ..domain.geometry import Drawing
from ..domain.results import EvaluationResult
from ..errors import EmptyDrawingError, ImageDecodeError
from ..scoring.engine import ScoringEngine
from ..utils.rendering import decode_png, encode_png, rasterize

# Logger for service errors
_logger = logging.getLogger(__name__)


class EvaluationService:
    """Runs the decode -> analyze -> score pipeline.

    Every call is independent; the service keeps no drawing state. The
    worker pool for submit() is created on first use.

    Attributes:
        analyzer: MetricsAnalyzer used on decoded rasters.
        engine: ScoringEngine used on metrics.
        tile_rows: Band height for tiled analysis, or None for one pass.
        max_workers: Size of the background pool.
    """

    def __init__(self, cfg: Optional[EvaluatorConfig] = None,
                 analyzer: Optional[MetricsAnalyzer] = None,
                 tile_rows: Optional[int] = None,
                 max_workers: int = config.EVALUATION_WORKERS):
        self.analyzer = analyzer or MetricsAnalyzer()
        self.engine = ScoringEngine(cfg)
        self.tile_rows = tile_rows
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def __enter__(self) -> EvaluationService:
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    def evaluate_buffer(self, buffer: np.ndarray, character: str) -> EvaluationResult:
        """Score an already decoded RGBA buffer."""
        metrics = self.analyzer.analyze(buffer, tile_rows=self.tile_rows)
        return self.engine.score(metrics, character)

    def evaluate(self, encoded_image: str, character: str) -> EvaluationResult:
        """Score a base64 PNG drawing of ``character``.

        Raises:
            ImageDecodeError: If the payload cannot be decoded. A broken
                payload is never scored as an empty drawing.
        """
        try:
            buffer = decode_png(encoded_image)
        except ImageDecodeError as e:
            _logger.warning("Failed to decode drawing for %r: %s", character, e)
            raise
        return self.evaluate_buffer(buffer, character)

    def evaluate_drawing(self, drawing: Drawing, character: str,
                         width: int = config.DEFAULT_CANVAS_SIZE,
                         height: int = config.DEFAULT_CANVAS_SIZE) -> EvaluationResult:
        """Rasterize, encode and score a drawing snapshot.

        The raster goes through the same PNG transport as a client upload,
        so both paths score identical pixels.

        Raises:
            EmptyDrawingError: If the drawing has no strokes.
            RenderUnavailableError: If PNG output is unavailable.
        """
        if drawing.is_empty:
            raise EmptyDrawingError()
        buffer = rasterize(drawing, width, height)
        return self.evaluate(encode_png(buffer), character)

    def submit(self, drawing: Drawing, character: str,
               width: int = config.DEFAULT_CANVAS_SIZE,
               height: int = config.DEFAULT_CANVAS_SIZE) -> Future:
        """Evaluate a drawing snapshot in the background.

        The emptiness check runs synchronously so the caller gets the
        validation error immediately. Nothing is retried.

        Returns:
            Future resolving to an EvaluationResult, or raising the
            pipeline's PracticeError.

        Raises:
            EmptyDrawingError: If the drawing has no strokes.
        """
        if drawing.is_empty:
            raise EmptyDrawingError()
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix='evaluation')
            executor = self._executor
        _logger.debug("Submitting %d strokes of %r", len(drawing), character)
        return executor.submit(self.evaluate_drawing, drawing, character, width, height)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background pool, if it was started."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


@dataclass
class PracticeSession:
    """State of one attempt at one character.

    The session is an explicit value rather than ambient state: callers
    pass it to whatever needs the drawing. Switching character creates a
    new session with an empty drawing.

    Attributes:
        character: Target character.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        engine: Capture engine holding the strokes.
        last_result: Most recent result for this session, if any.
    """
    character: str
    width: int = config.DEFAULT_CANVAS_SIZE
    height: int = config.DEFAULT_CANVAS_SIZE
    engine: StrokeCaptureEngine = field(default_factory=StrokeCaptureEngine)
    last_result: Optional[EvaluationResult] = None

    def evaluate(self, service: EvaluationService) -> EvaluationResult:
        """Evaluate the current drawing synchronously.

        Raises:
            EmptyDrawingError: If nothing has been drawn.
        """
        result = service.evaluate_drawing(self.engine.snapshot(), self.character,
                                          self.width, self.height)
        self.last_result = result
        return result

    def submit(self, service: EvaluationService) -> Future:
        """Evaluate a snapshot of the current drawing in the background.

        Capture may continue while the evaluation runs. The result is
        recorded in ``last_result`` only if the drawing it was computed
        from is still the current one.

        Raises:
            EmptyDrawingError: If nothing has been drawn.
        """
        drawing = self.engine.snapshot()
        future = service.submit(drawing, self.character, self.width, self.height)

        def _record(done: Future) -> None:
            if done.cancelled() or done.exception() is not None:
                return
            if self.engine.snapshot() == drawing:
                self.last_result = done.result()
            else:
                _logger.debug("Discarding stale result for %r", self.character)

        future.add_done_callback(_record)
        return future

    def reset(self) -> None:
        """Clear the drawing and forget the last result."""
        self.engine.clear()
        self.last_result = None

    def switch_to(self, character: str) -> PracticeSession:
        """Start a fresh session for ``character`` on the same canvas."""
        return PracticeSession(character, self.width, self.height)


class CharacterDeck:
    """Ordered list of practice characters with a current position.

    Example:
        >>> deck = CharacterDeck(['一', '二'])
        >>> deck.advance()
        '二'
        >>> deck.merge(['二', '三'])
        ['三']
    """

    def __init__(self, characters: Iterable[str] = config.PRACTICE_CHARACTERS):
        self._characters: List[str] = []
        for c in characters:
            if c not in self._characters:
                self._characters.append(c)
        if not self._characters:
            raise ValueError("A practice deck needs at least one character")
        self._index = 0

    def __len__(self) -> int:
        return len(self._characters)

    def __iter__(self) -> Iterator[str]:
        return iter(self._characters)

    @property
    def characters(self) -> tuple:
        return tuple(self._characters)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> str:
        return self._characters[self._index]

    def select(self, index: int) -> str:
        """Jump to ``index``.

        Raises:
            IndexError: If the index is outside the deck.
        """
        if not 0 <= index < len(self._characters):
            raise IndexError(f"Character index {index} out of range")
        self._index = index
        return self.current

    def advance(self) -> str:
        """Move to the next character, wrapping around at the end."""
        self._index = (self._index + 1) % len(self._characters)
        return self.current

    def merge(self, characters: Sequence[str]) -> List[str]:
        """Append characters not already in the deck.

        Returns:
            The characters that were added, in order.
        """
        added = []
        for c in characters:
            if c not in self._characters:
                self._characters.append(c)
                added.append(c)
        if added:
            _logger.info("Added %d characters to the deck", len(added))
        return added


def _is_han(char: str) -> bool:
    name = unicodedata.name(char, '')
    return name.startswith(('CJK UNIFIED IDEOGRAPH', 'CJK COMPATIBILITY IDEOGRAPH'))


def extract_han_characters(text: str) -> List[str]:
    """Unique Han characters of ``text`` in first-seen order.

    Whitespace, digits, punctuation and non-Han letters are dropped. This
    is the clean-up applied to text returned by a recognition service
    before it is merged into a CharacterDeck.
    """
    seen: List[str] = []
    for char in text:
        if _is_han(char) and char not in seen:
            seen.append(char)
    return seen


def should_advance(result: EvaluationResult,
                   threshold: int = config.ADVANCE_THRESHOLD) -> bool:
    """True when a result is good enough to move on to the next character.

    This gate is stricter than the pass threshold used for ``is_correct``.
    """
    return result.is_correct and result.score >= threshold


def evaluate(encoded_image: str, character: str,
             cfg: Optional[EvaluatorConfig] = None) -> EvaluationResult:
    """Score a base64 PNG drawing with a one-off service."""
    return EvaluationService(cfg).evaluate(encoded_image, character)
