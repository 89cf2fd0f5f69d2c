"""Unit tests for the practice-grader command line."""

import io
import json
import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np
from PIL import Image

# Add parent dir to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from practice_lib.cli import _create_argument_parser, main


def write_square_png(path):
    buffer = np.zeros((100, 100, 4), dtype=np.uint8)
    buffer[..., 3] = 255
    buffer[30:70, 30:70, :3] = 255
    Image.fromarray(buffer).save(path, format='PNG')


class TestArgumentParser(unittest.TestCase):
    """Tests for _create_argument_parser."""

    def test_grade_defaults(self):
        args = _create_argument_parser().parse_args(['grade', 'x.png', '--char', '山'])
        self.assertEqual(args.command, 'grade')
        self.assertEqual(args.locale, 'zh-Hant')
        self.assertFalse(args.json)
        self.assertFalse(args.legacy)

    def test_grade_requires_char(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                _create_argument_parser().parse_args(['grade', 'x.png'])

    def test_serve_options(self):
        args = _create_argument_parser().parse_args(
            ['--log-level', 'DEBUG', 'serve', '--port', '8080', '--debug'])
        self.assertEqual(args.port, 8080)
        self.assertTrue(args.debug)
        self.assertEqual(args.log_level, 'DEBUG')


class TestMain(unittest.TestCase):
    """Tests for main."""

    def setUp(self):
        """Save logging state and create a scratch directory."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level
        self.tmp = tempfile.TemporaryDirectory()
        self.png = os.path.join(self.tmp.name, 'square.png')
        write_square_png(self.png)

    def tearDown(self):
        """Restore logging state."""
        self.root_logger.handlers = self.original_handlers
        self.root_logger.setLevel(self.original_level)
        self.tmp.cleanup()

    def test_grade_json(self):
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            status = main(['grade', self.png, '--char', '口', '--locale', 'en', '--json'])

        self.assertEqual(status, 0)
        result = json.loads(out.getvalue())
        self.assertEqual(result['score'], 85)
        self.assertTrue(result['isCorrect'])
        self.assertEqual(result['identifiedCharacter'], '口')

    def test_grade_text(self):
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            status = main(['grade', self.png, '--char', '口'])

        self.assertEqual(status, 0)
        self.assertIn('Score:      85', out.getvalue())
        self.assertIn('Ready for the next character.', out.getvalue())

    def test_grade_missing_file(self):
        with patch('sys.stderr', new_callable=io.StringIO) as err:
            status = main(['grade', os.path.join(self.tmp.name, 'nope.png'), '--char', '口'])

        self.assertEqual(status, 2)
        self.assertIn('cannot read', err.getvalue())

    def test_grade_not_an_image(self):
        bogus = os.path.join(self.tmp.name, 'bogus.png')
        with open(bogus, 'wb') as f:
            f.write(b'not an image')

        with patch('sys.stderr', new_callable=io.StringIO) as err:
            status = main(['grade', bogus, '--char', '口'])

        self.assertEqual(status, 1)
        self.assertIn('error:', err.getvalue())

    def test_serve(self):
        from practice_lib.app import app

        with patch.object(app, 'run') as run:
            status = main(['serve', '--host', '0.0.0.0', '--port', '5001'])

        self.assertEqual(status, 0)
        run.assert_called_once_with(host='0.0.0.0', port=5001, debug=False)


if __name__ == '__main__':
    unittest.main()
