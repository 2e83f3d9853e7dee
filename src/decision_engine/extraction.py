"""Split a raw model response into its narrative and decoded decision array."""

from __future__ import annotations

import structlog
from pydantic import TypeAdapter, ValidationError

from decision_engine.errors import DecodeError, ExtractionError
from decision_engine.models.decision import Decision

logger = structlog.get_logger()

# Typographic quotes some input tooling substitutes for ASCII ones.
SMART_QUOTES = {
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
}

_DECISION_LIST = TypeAdapter(list[Decision])


def extract_cot_trace(response: str) -> str:
    """Return the reasoning narrative: everything before the first '['."""
    start = response.find("[")
    if start == -1:
        return response.strip()
    return response[:start].strip()


def find_matching_bracket(text: str, start: int) -> int:
    """Index of the ']' closing the '[' at ``start``, or -1.

    Plain depth counting: brackets inside JSON string values are counted too.
    """
    if start < 0 or start >= len(text) or text[start] != "[":
        return -1

    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return i

    return -1


def normalize_quotes(text: str) -> str:
    for smart, plain in SMART_QUOTES.items():
        text = text.replace(smart, plain)
    return text


def extract_array(response: str) -> str:
    """Locate the first complete JSON array literal in the response."""
    start = response.find("[")
    if start == -1:
        raise ExtractionError(ExtractionError.MISSING_ARRAY_START)

    end = find_matching_bracket(response, start)
    if end == -1:
        raise ExtractionError(ExtractionError.UNTERMINATED_ARRAY)

    return response[start : end + 1].strip()


def decode_decisions(content: str) -> list[Decision]:
    """Decode a JSON array of decisions. One bad element fails the whole batch."""
    try:
        return _DECISION_LIST.validate_json(content)
    except ValidationError as e:
        logger.debug("decision_decode_error", errors=e.error_count(), content=content[:200])
        raise DecodeError(detail=str(e), content=content) from e


def extract_decisions(response: str) -> list[Decision]:
    content = normalize_quotes(extract_array(response))
    return decode_decisions(content)
