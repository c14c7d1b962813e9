"""
Helpers for pulling JSON out of LLM answers.

The itinerary backend returns model text that usually wraps the payload in
prose or markdown fences ("Here are some hotels: ```json [ ... ] ```").
We keep the outermost bracket pair and parse what is inside.
"""

import json
import logging
from typing import Any, Dict, List

from voyagehub.core.exceptions import MalformedResponse

logger = logging.getLogger(__name__)


def _as_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return json.dumps(raw)


def _slice_between(text: str, opening: str, closing: str) -> str:
    start = text.find(opening)
    end = text.rfind(closing)
    if start != -1 and end != -1 and end > start:
        return text[start:end + 1]
    return text


def _parse(text: str, expected: type) -> Any:
    try:
        value = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not parse JSON from model output: {e}")
        raise MalformedResponse(f"Invalid JSON: {e}", raw=text)
    if not isinstance(value, expected):
        raise MalformedResponse(f"Expected a JSON {expected.__name__}, got {type(value).__name__}", raw=text)
    return value


def extract_json_array(raw: Any) -> List[Any]:
    """Parse the text between the first '[' and the last ']'."""
    return _parse(_slice_between(_as_text(raw), "[", "]"), list)


def extract_json_object(raw: Any) -> Dict[str, Any]:
    """Parse the text between the first '{' and the last '}'."""
    return _parse(_slice_between(_as_text(raw), "{", "}"), dict)
