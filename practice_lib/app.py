"""Flask application setup and shared helpers for the practice grader API.

This module is the configuration hub of the web API. It provides:

    - The Flask application instance shared by the route module
    - Application-wide logging configuration
    - Settings read from ``PRACTICE_*`` environment variables
    - JSON response helpers and request validation
    - Access to per-locale EvaluationService instances

Architecture:
    - practice_lib/app.py: App instance, config and utilities (this module)
    - practice_lib/routes.py: JSON routes, registered on import
    - practice_lib/cli.py: ``serve`` command that imports both

Example:
    Import the app and register the routes::

        from practice_lib.app import app, configure_logging
        import practice_lib.routes  # noqa: F401 - registers routes

        configure_logging(level='DEBUG')
        app.run(port=5000)

Attributes:
    app (Flask): The Flask application instance.
    MAX_CANVAS_SIZE (int): Largest canvas side accepted from clients.
"""

from __future__ import annotations

import logging
import os
import threading

from flask import Flask, jsonify

from . import __version__, config
from .api.services import EvaluationService
from .config import EvaluatorConfig
from .scoring.feedback import PHRASES

# Module logger
logger = logging.getLogger(__name__)

MAX_CANVAS_SIZE = config.MAX_CANVAS_SIZE


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Sets up logging with a consistent format across all modules. Call this
    at startup before serving requests.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to log file. If None, logs to stderr only.

    Example:
        Configure at startup::

            from practice_lib.app import configure_logging
            configure_logging(level='DEBUG', log_file='grader.log')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')


# Flask application
app = Flask(__name__)
app.config.update(
    LOCALE=os.environ.get('PRACTICE_LOCALE', config.DEFAULT_LOCALE),
    CANVAS_SIZE=int(os.environ.get('PRACTICE_CANVAS_SIZE', config.DEFAULT_CANVAS_SIZE)),
    VERSION=__version__,
)

_services: dict[str, EvaluationService] = {}
_services_lock = threading.Lock()


def get_service(locale: str | None = None) -> EvaluationService:
    """Return the shared EvaluationService for ``locale``.

    Services are stateless between calls, so one instance per locale is
    reused across requests.

    Raises:
        ValueError: If the locale has no phrase table.
    """
    locale = locale or app.config['LOCALE']
    with _services_lock:
        service = _services.get(locale)
        if service is None:
            service = EvaluationService(EvaluatorConfig.track_variant(locale=locale))
            _services[locale] = service
        return service


def success_response(**extra):
    """JSON ``{"ok": true, ...}`` response."""
    return jsonify(ok=True, **extra)


def data_response(**data):
    """JSON response with only the given fields."""
    return jsonify(**data)


def error_response(message: str, status: int = 400):
    """JSON ``{"error": message}`` response with an HTTP status.

    Returns:
        tuple: (flask.Response, status_code) ready to return from a route.
    """
    return jsonify(error=message), status


def validate_char_param(char: str | None) -> tuple[bool, tuple | None]:
    """Validate a target character from a request.

    Returns:
        tuple: (is_valid, error_response) where error_response is None when
            valid, otherwise a (Response, 400) tuple.
    """
    if not char:
        return False, error_response("Missing character")
    if not isinstance(char, str) or len(char) != 1:
        return False, error_response("Character must be a single character")
    return True, None


def validate_locale_param(locale: str | None) -> tuple[bool, tuple | None]:
    """Validate an optional locale from a request."""
    if locale is None or locale in PHRASES:
        return True, None
    return False, error_response(f"Unsupported locale: {locale}")


def parse_canvas_size(data: dict) -> tuple[int, int]:
    """Read width/height from a request body, defaulting to the app size.

    Raises:
        ValueError: If a dimension is not an integer in [1, MAX_CANVAS_SIZE].
    """
    size = app.config['CANVAS_SIZE']
    dims = []
    for key in ('width', 'height'):
        value = data.get(key, size)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer")
        if not 1 <= value <= MAX_CANVAS_SIZE:
            raise ValueError(f"{key} must be between 1 and {MAX_CANVAS_SIZE}")
        dims.append(value)
    return dims[0], dims[1]
