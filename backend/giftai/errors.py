"""
Error taxonomy for the gift API.

Every failure is caught at the endpoint boundary and rendered as
``{"error": message}`` with the status carried by the exception.
"""

from typing import Optional

from giftai.logging import get_logger

logger = get_logger(__name__)


class GiftAIError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error. Please try again later."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(GiftAIError):
    status_code = 400
    default_message = "Invalid request."


class ConfigError(GiftAIError):
    status_code = 500
    default_message = "Server configuration error."


class UpstreamRateLimited(GiftAIError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class ContentFiltered(GiftAIError):
    status_code = 400
    default_message = "Content filtered by safety settings. Please try different inputs."


class MalformedUpstreamOutput(GiftAIError):
    status_code = 500
    default_message = "Failed to generate valid gift suggestions. Please try again."


class InternalError(GiftAIError):
    status_code = 500


class AuthError(GiftAIError):
    status_code = 401
    default_message = "Authentication required."


class NotFound(GiftAIError):
    status_code = 404
    default_message = "Not found."


_RATE_LIMIT_PHRASES = ("quota", "rate limit", "ratelimit", "resource_exhausted")
_SAFETY_PHRASES = ("SAFETY", "ContentPolicyViolation", "content_filter")


def map_upstream_error(exc: BaseException) -> GiftAIError:
    """Map a model-call or network exception to the taxonomy by phrase match."""
    if isinstance(exc, GiftAIError):
        return exc
    text = f"{type(exc).__name__}: {exc}"
    lowered = text.lower()
    if "api key" in lowered or "api_key" in lowered:
        return ConfigError("Gemini API configuration error")
    if any(p in lowered for p in _RATE_LIMIT_PHRASES):
        return UpstreamRateLimited()
    if any(p in text for p in _SAFETY_PHRASES):
        return ContentFiltered()
    return InternalError()
