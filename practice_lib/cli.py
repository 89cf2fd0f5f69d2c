#!/usr/bin/env python3
"""Command-line interface for the practice grader.

Usage:
    practice-grader grade drawing.png --char 山
    practice-grader grade drawing.png --char 山 --locale en --json
    practice-grader serve --port 5000

Or run via the module:
    python -m practice_lib grade drawing.png --char 山
"""

from __future__ import annotations

import argparse
import base64
import json
import sys
from pathlib import Path

from . import config
from .api.services import EvaluationService, should_advance
from .config import EvaluatorConfig
from .errors import PracticeError
from .scoring.feedback import PHRASES


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='practice-grader',
        description='Grade handwritten character drawings'
    )
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help='Log level (default: WARNING)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')
    sub = parser.add_subparsers(dest='command', required=True)

    grade = sub.add_parser('grade', help='Grade a PNG drawing')
    grade.add_argument('image', type=str,
                       help='PNG file (white ink on a dark background)')
    grade.add_argument('--char', '-c', type=str, required=True,
                       help='Target character')
    grade.add_argument('--locale', '-l', type=str, default=config.DEFAULT_LOCALE,
                       choices=sorted(PHRASES),
                       help=f'Feedback language (default: {config.DEFAULT_LOCALE})')
    grade.add_argument('--legacy', action='store_true',
                       help='Use the legacy scoring variant (no track penalty)')
    grade.add_argument('--json', action='store_true',
                       help='Print the result as JSON')

    serve = sub.add_parser('serve', help='Run the JSON API')
    serve.add_argument('--host', type=str, default='127.0.0.1',
                       help='Bind address (default: 127.0.0.1)')
    serve.add_argument('--port', '-p', type=int, default=5000,
                       help='Port (default: 5000)')
    serve.add_argument('--debug', action='store_true',
                       help='Enable Flask debug mode')
    return parser


def _grade_command(args) -> int:
    """Handle the grade command.

    Returns:
        Process exit status.
    """
    path = Path(args.image)
    try:
        payload = base64.b64encode(path.read_bytes()).decode('ascii')
    except OSError as e:
        print(f"error: cannot read {path}: {e}", file=sys.stderr)
        return 2

    cfg = (EvaluatorConfig.legacy_variant(args.locale) if args.legacy
           else EvaluatorConfig.track_variant(args.locale))
    try:
        result = EvaluationService(cfg).evaluate(payload, args.char)
    except PracticeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        print(f"Score:      {result.score}")
        print(f"Correct:    {'yes' if result.is_correct else 'no'}")
        print(f"Identified: {result.identified_character}")
        print(f"Feedback:   {result.feedback}")
        if should_advance(result):
            print("Ready for the next character.")
    return 0


def _serve_command(args) -> int:
    """Handle the serve command."""
    from .app import app
    from . import routes  # noqa: F401 - registers routes

    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    from .app import configure_logging

    parser = _create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, log_file=args.log_file)

    if args.command == 'grade':
        return _grade_command(args)
    return _serve_command(args)


if __name__ == '__main__':
    sys.exit(main())
