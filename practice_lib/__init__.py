"""Character Practice Grader Package.

Offline grading of freehand character drawings. A drawing is recorded as
vector strokes, rasterized to a fixed-size monochrome buffer, reduced to
ink statistics and scored on a 0-100 scale with one sentence of feedback.

Architecture Overview:
    The pipeline is a chain of pure steps, each in its own subpackage:

    - practice_lib.capture records pointer gestures as strokes
    - practice_lib.utils renders strokes to pixels and encodes them as PNG
    - practice_lib.analysis measures coverage, span, balance and edges
    - practice_lib.scoring turns measurements into a score and feedback
    - practice_lib.api offers services and session state to callers

    practice_lib.app and practice_lib.routes expose the services as a JSON
    API; practice_lib.cli grades PNG files from the command line.

The package is organized into the following modules:
    domain: Value objects (Point, Stroke, Drawing, DrawingMetrics,
        EvaluationResult).
    capture: StrokeCaptureEngine and the CaptureChannel event queue.
    utils: Rasterization, preview rendering and PNG transport.
    analysis: MetricsAnalyzer and the ink test.
    scoring: ScoringEngine, composite score components and feedback text.
    api: EvaluationService, PracticeSession, CharacterDeck and the
        character set conversion client.
    config: Shared constants and EvaluatorConfig.
    errors: PracticeError and its subclasses.

Example usage:
    Grading strokes::

        from practice_lib import Drawing, EvaluationService, Stroke

        drawing = Drawing((Stroke.from_tuples([(60, 200), (340, 200)]),))
        result = EvaluationService().evaluate_drawing(drawing, '一')
        print(result.score, result.feedback)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

__version__ = '1.0.0'

from .analysis import MetricsAnalyzer, analyze
from .api import CharacterDeck, EvaluationService, PracticeSession, evaluate
from .capture import CaptureChannel, StrokeCaptureEngine
from .config import EvaluatorConfig
from .domain import Drawing, DrawingMetrics, EvaluationResult, Point, Stroke
from .errors import (
    ConversionError,
    EmptyDrawingError,
    ImageDecodeError,
    PracticeError,
    RenderUnavailableError,
)
from .scoring import ScoringEngine
from .utils import decode_png, encode_png, rasterize

__all__ = [
    # Domain objects
    'Point', 'Stroke', 'Drawing', 'DrawingMetrics', 'EvaluationResult',
    # Pipeline
    'StrokeCaptureEngine', 'CaptureChannel',
    'rasterize', 'encode_png', 'decode_png',
    'MetricsAnalyzer', 'analyze',
    'ScoringEngine', 'EvaluatorConfig',
    # Services
    'EvaluationService', 'PracticeSession', 'CharacterDeck', 'evaluate',
    # Errors
    'PracticeError', 'EmptyDrawingError', 'ImageDecodeError',
    'RenderUnavailableError', 'ConversionError',
]
