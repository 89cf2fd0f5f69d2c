"""Traditional/simplified character conversion client.

Converts practice text between traditional and simplified characters
through the public zhconvert service. This is the only part of the package
that talks to the network, and the grading pipeline never calls it.

Example:
    >>> convert_character_set('汉字', 'traditional')
    '漢字'
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .. import config
from ..errors import ConversionError

logger = logging.getLogger(__name__)

CONVERTER_TARGETS = {
    'traditional': 'Traditional',
    'simplified': 'Simplified',
}


def convert_character_set(text: str, target: str,
                          session: Optional[requests.Session] = None,
                          url: str = config.CONVERT_URL,
                          timeout: float = config.CONVERT_TIMEOUT) -> str:
    """Convert ``text`` to the ``target`` character set.

    Args:
        text: Text to convert. Empty text is returned without a request.
        target: 'traditional' or 'simplified'.
        session: Optional requests session (connection reuse, testing).
        url: Conversion endpoint.
        timeout: Request timeout in seconds.

    Returns:
        The converted text.

    Raises:
        ValueError: If ``target`` is not a known character set.
        ConversionError: If the request fails, returns a non-OK status or
            an unexpected body.
    """
    if target not in CONVERTER_TARGETS:
        raise ValueError(f"Unknown target {target!r}; expected one of {sorted(CONVERTER_TARGETS)}")
    if not text:
        return ''

    http = session or requests
    params = {'converter': CONVERTER_TARGETS[target], 'text': text}
    try:
        resp = http.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Conversion request failed: %s", e)
        raise ConversionError(f"Conversion request failed: {e}") from e

    if not resp.ok:
        raise ConversionError(f"Conversion request failed with status {resp.status_code}")

    try:
        converted = resp.json().get('data', {}).get('text')
    except (ValueError, AttributeError) as e:
        raise ConversionError("Unexpected response format from conversion API") from e

    if not isinstance(converted, str):
        raise ConversionError("Unexpected response format from conversion API")
    return converted
