"""Shared pytest fixtures for the practice_lib test suite.

This module provides common fixtures used across unit and integration
tests.

Fixtures:
    canvas_size: Default square canvas side in pixels
    diagonal_drawing: One corner-to-corner stroke
    center_dot_drawing: A 2-pixel stroke at the canvas center
    corner_cluster_drawing: Three short strokes in the top-left corner
    blank_buffer: Opaque black RGBA buffer with no ink
    square_buffer: RGBA buffer with a white square in the middle
    capture_engine: Fresh StrokeCaptureEngine
    service: EvaluationService with English feedback, shut down afterwards
    flask_client: Flask test client with all routes registered

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from practice_lib.domain.geometry import Drawing, Stroke


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Drawing Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def canvas_size():
    """Return the default canvas side (400 pixels)."""
    return 400


@pytest.fixture
def diagonal_drawing():
    """Return a single stroke from (0, 0) to (400, 400).

    The stroke spans the whole canvas, is centered and touches the border
    at both ends.

    Returns:
        Drawing: One two-point stroke.
    """
    return Drawing((Stroke.from_tuples([(0, 0), (400, 400)]),))


@pytest.fixture
def center_dot_drawing():
    """Return a 2-pixel stroke at the canvas center.

    Returns:
        Drawing: One stroke from (199, 200) to (201, 200).
    """
    return Drawing((Stroke.from_tuples([(199, 200), (201, 200)]),))


@pytest.fixture
def corner_cluster_drawing():
    """Return three short horizontal strokes inside the top-left 10% box.

    The ink stays clear of the border but entirely outside the guide track.

    Returns:
        Drawing: Three two-point strokes.
    """
    return Drawing(tuple(
        Stroke.from_tuples([(10, y), (35, y)]) for y in (10, 22, 35)
    ))


# -----------------------------------------------------------------------------
# Buffer Fixtures
# -----------------------------------------------------------------------------

def make_buffer(height=10, width=10):
    """Create an opaque black RGBA buffer."""
    buffer = np.zeros((height, width, 4), dtype=np.uint8)
    buffer[..., 3] = 255
    return buffer


@pytest.fixture
def blank_buffer():
    """Return a 10x10 opaque black buffer with no ink.

    Returns:
        numpy.ndarray: uint8 array of shape (10, 10, 4).
    """
    return make_buffer()


@pytest.fixture
def square_buffer():
    """Return a 100x100 buffer with a white 40x40 square in the middle.

    Ink occupies rows and columns 30..69, so coverage is 0.16, both spans
    are 0.4 and the centroid is exactly at the canvas center.

    Returns:
        numpy.ndarray: uint8 array of shape (100, 100, 4).
    """
    buffer = make_buffer(100, 100)
    buffer[30:70, 30:70, :3] = 255
    return buffer


# -----------------------------------------------------------------------------
# Service Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def capture_engine():
    """Return an empty StrokeCaptureEngine."""
    from practice_lib.capture.engine import StrokeCaptureEngine
    return StrokeCaptureEngine()


@pytest.fixture
def service():
    """Create an EvaluationService with English feedback.

    Yields:
        EvaluationService: Shut down after the test.
    """
    from practice_lib.api.services import EvaluationService
    from practice_lib.config import EvaluatorConfig

    with EvaluationService(EvaluatorConfig.track_variant(locale='en')) as svc:
        yield svc


# -----------------------------------------------------------------------------
# Flask Client Fixture
# -----------------------------------------------------------------------------

@pytest.fixture
def flask_client():
    """Create a Flask test client for the grader API.

    Returns:
        flask.testing.FlaskClient: Test client for making requests.

    Example:
        def test_health(flask_client):
            response = flask_client.get('/api/health')
            assert response.status_code == 200
    """
    from practice_lib.app import app
    import practice_lib.routes  # noqa: F401 - registers routes

    app.config['TESTING'] = True

    with app.test_client() as client:
        yield client
