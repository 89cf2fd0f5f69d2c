"""Flask routes for the practice grader API.

Importing this module registers the routes on ``practice_lib.app.app``.

Routes:
    GET  /api/health            service status and version
    GET  /api/characters        default practice deck
    POST /api/characters/merge  add Han characters from recognized text to a deck
    POST /api/evaluate          grade a base64 PNG drawing
    POST /api/evaluate-strokes  grade raw strokes
    POST /api/render            render strokes as PNG (optionally with grid)
    POST /api/convert           traditional/simplified conversion
"""

import io
import logging

from flask import request, send_file
from PIL import Image

from . import config
from .api.conversion import convert_character_set
from .api.services import CharacterDeck, extract_han_characters
from .app import (
    app, data_response, error_response, get_service, parse_canvas_size,
    success_response, validate_char_param, validate_locale_param,
)
from .domain.geometry import Drawing
from .errors import (
    ConversionError, EmptyDrawingError, ImageDecodeError, RenderUnavailableError,
)
from .utils.rendering import ensure_render_environment, rasterize, render_preview

logger = logging.getLogger(__name__)


@app.errorhandler(EmptyDrawingError)
def _empty_drawing(e):
    return error_response(str(e), 400)


@app.errorhandler(ImageDecodeError)
def _decode_failed(e):
    return error_response(f"Analysis unavailable: {e}", 422)


@app.errorhandler(RenderUnavailableError)
def _render_unavailable(e):
    logger.error("Render environment unavailable: %s", e)
    return error_response(str(e), 503)


@app.errorhandler(ConversionError)
def _conversion_failed(e):
    return error_response(str(e), 502)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _drawing_from(data):
    """Parse ``data['strokes']``; returns (drawing, None) or (None, error)."""
    raw = data.get('strokes')
    if not isinstance(raw, list):
        return None, error_response("Missing strokes data")
    try:
        return Drawing.from_list(raw), None
    except (TypeError, ValueError) as e:
        return None, error_response(f"Invalid strokes: {e}")


@app.route('/api/health')
def api_health():
    return success_response(version=app.config['VERSION'])


@app.route('/api/characters')
def api_characters():
    return data_response(characters=list(config.PRACTICE_CHARACTERS))


@app.route('/api/characters/merge', methods=['POST'])
def api_characters_merge():
    """Merge the Han characters of ``text`` into a deck.

    The deck is ``characters`` when given, the default practice deck
    otherwise. Nothing is stored server-side; clients keep the returned deck.
    """
    data = _json_body()
    if data is None:
        return error_response("Expected a JSON object")
    text = data.get('text')
    if not isinstance(text, str):
        return error_response("text must be a string")
    characters = data.get('characters')
    if characters is None:
        characters = config.PRACTICE_CHARACTERS
    elif not isinstance(characters, list) or not characters:
        return error_response("characters must be a non-empty list")
    for c in characters:
        ok, err = validate_char_param(c)
        if not ok:
            return err

    deck = CharacterDeck(characters)
    added = deck.merge(extract_han_characters(text))
    logger.debug("Merged %d new characters into a deck of %d", len(added), len(deck))
    return data_response(characters=list(deck.characters), added=added)


@app.route('/api/evaluate', methods=['POST'])
def api_evaluate():
    data = _json_body()
    if data is None:
        return error_response("Expected a JSON object")
    c = data.get('character')
    ok, err = validate_char_param(c)
    if not ok:
        return err
    locale = data.get('locale')
    ok, err = validate_locale_param(locale)
    if not ok:
        return err
    image = data.get('image')
    if not image:
        raise EmptyDrawingError()
    result = get_service(locale).evaluate(image, c)
    return data_response(**result.to_dict())


@app.route('/api/evaluate-strokes', methods=['POST'])
def api_evaluate_strokes():
    data = _json_body()
    if data is None:
        return error_response("Expected a JSON object")
    c = data.get('character')
    ok, err = validate_char_param(c)
    if not ok:
        return err
    locale = data.get('locale')
    ok, err = validate_locale_param(locale)
    if not ok:
        return err
    drawing, err = _drawing_from(data)
    if err:
        return err
    try:
        width, height = parse_canvas_size(data)
    except ValueError as e:
        return error_response(str(e))
    result = get_service(locale).evaluate_drawing(drawing, c, width, height)
    return data_response(**result.to_dict())


@app.route('/api/render', methods=['POST'])
def api_render():
    data = _json_body()
    if data is None:
        return error_response("Expected a JSON object")
    drawing, err = _drawing_from(data)
    if err:
        return err
    try:
        width, height = parse_canvas_size(data)
    except ValueError as e:
        return error_response(str(e))
    ensure_render_environment()

    if data.get('grid'):
        img = render_preview(drawing, width, height)
    else:
        buffer = rasterize(drawing, width, height)
        if buffer is None:
            raise EmptyDrawingError()
        img = Image.fromarray(buffer)

    buf = io.BytesIO()
    img.save(buf, format='PNG')
    buf.seek(0)
    return send_file(buf, mimetype='image/png')


@app.route('/api/convert', methods=['POST'])
def api_convert():
    data = _json_body()
    if data is None:
        return error_response("Expected a JSON object")
    text = data.get('text', '')
    if not isinstance(text, str):
        return error_response("text must be a string")
    try:
        converted = convert_character_set(text, data.get('target', ''))
    except ValueError as e:
        return error_response(str(e))
    return data_response(text=converted)
