"""Parse and validate the model's JSON gift suggestions."""

import json
import re
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from giftai.errors import MalformedUpstreamOutput
from giftai.logging import get_logger
from giftai.schemas.gift import GiftSuggestion

logger = get_logger(__name__)

SUGGESTION_COUNT = 3

_FENCE_RE = re.compile(r"```(?:json)?\n?")
_suggestions_adapter = TypeAdapter(list[GiftSuggestion])


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def try_parse_suggestions(raw: str) -> Optional[list[dict]]:
    """
    Return exactly SUGGESTION_COUNT validated suggestions as plain dicts,
    or None when the text is not valid JSON, has the wrong count, or any
    suggestion/link is missing a field. The raw text is logged on failure.
    """
    cleaned = strip_code_fences(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("suggestions.parse_failed error=%s raw=%s", e, raw)
        return None
    if not isinstance(data, list):
        logger.warning("suggestions.not_array type=%s raw=%s", type(data).__name__, raw)
        return None
    if len(data) != SUGGESTION_COUNT:
        logger.warning("suggestions.bad_count expected=%s got=%s raw=%s", SUGGESTION_COUNT, len(data), raw)
        return None
    try:
        suggestions = _suggestions_adapter.validate_python(data)
    except ValidationError as e:
        logger.warning("suggestions.invalid_structure errors=%s raw=%s", e.error_count(), raw)
        return None
    return [s.model_dump() for s in suggestions]


def parse_suggestions(raw: str) -> list[dict]:
    suggestions = try_parse_suggestions(raw)
    if suggestions is None:
        raise MalformedUpstreamOutput()
    return suggestions
