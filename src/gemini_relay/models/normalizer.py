"""
Answer extraction for inference responses.

Responses arrive in different wrappers depending on the SDK version, so the
answer is looked up along a fixed list of paths. The first path that ends in
a string wins. When none does, the whole response is returned as indented
JSON so the caller still gets something readable.
"""

import json
import math
import logging
from dataclasses import dataclass
from typing import Any, Tuple, Union

from gemini_relay.models.errors import ExtractionFailure

logger = logging.getLogger(__name__)

PathKey = Union[str, int]

ANSWER_PATHS: Tuple[Tuple[PathKey, ...], ...] = (
    ("response", "candidates", 0, "content", "parts", 0, "text"),
    ("candidates", 0, "content", "parts", 0, "text"),
    ("response", "candidates", 0, "content", "text"),
)

@dataclass(frozen=True)
class TextAnswer:
    text: str
    path: Tuple[PathKey, ...]

@dataclass(frozen=True)
class RawAnswer:
    payload: Any

    @property
    def text(self) -> str:
        return dump_json(self.payload)

DecodedAnswer = Union[TextAnswer, RawAnswer]

def to_plain(response: Any) -> Any:
    """Convert SDK pydantic objects into plain JSON data with camelCase keys."""
    if hasattr(response, "model_dump"):
        return response.model_dump(mode="json", by_alias=True, exclude_none=True)
    return response

def _js_numbers(value: Any, _active: frozenset = frozenset()) -> Any:
    # JavaScript has one number type: 1.0 prints as 1, NaN and Infinity as null.
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, (dict, list, tuple)):
        if id(value) in _active:
            raise ValueError("Circular reference detected")
        active = _active | {id(value)}
        if isinstance(value, dict):
            return {key: _js_numbers(item, active) for key, item in value.items()}
        return [_js_numbers(item, active) for item in value]
    return value

def dump_json(payload: Any) -> str:
    # Same layout as JSON.stringify(value, null, 2).
    return json.dumps(_js_numbers(payload), indent=2, ensure_ascii=False, default=str)

def _lookup(payload: Any, path: Tuple[PathKey, ...]) -> Any:
    node = payload
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, (list, tuple)) or len(node) <= key:
                return None
            node = node[key]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        if node is None:
            return None
    return node

def _find_text(payload: Any) -> TextAnswer:
    for path in ANSWER_PATHS:
        value = _lookup(payload, path)
        if isinstance(value, str):
            return TextAnswer(text=value, path=path)
    raise ExtractionFailure("No answer text found in inference response")

def decode_response(response: Any) -> DecodedAnswer:
    """
    Decode an inference response into a text answer or the raw fallback.

    Args:
        response: SDK response object or already-plain JSON data

    Returns:
        TextAnswer when one of ANSWER_PATHS resolves to a string,
        otherwise RawAnswer wrapping the plain payload
    """
    payload = response
    try:
        payload = to_plain(response)
        return _find_text(payload)
    except ExtractionFailure:
        logger.warning("Unrecognized response shape, returning raw JSON")
        return RawAnswer(payload=payload)
    except Exception as e:
        logger.error(f"Error extracting text: {str(e)}")
        return RawAnswer(payload=payload)

def extract_text(response: Any) -> str:
    """Return the answer text of `response`; never raises."""
    answer = decode_response(response)
    try:
        return answer.text
    except (TypeError, ValueError, RecursionError) as e:
        # Circular or otherwise unencodable payloads.
        logger.error(f"Error dumping response: {str(e)}")
        return repr(answer.payload)
