"""
Chat refinement of an existing suggestion set.

Each request runs two phases:

1. Intent classification of the latest user message (REFINEMENT | DISCUSSION).
2. REFINEMENT asks for three new suggestions. If the reply fails validation
   the request moves to DISCUSSION instead of failing. DISCUSSION returns a
   free-form conversational reply.

The outcome is one of two states: ValidatedSuggestions or DiscussionReply.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from giftai.errors import ConfigError, GiftAIError, InvalidInput, map_upstream_error
from giftai.logging import get_logger
from giftai.schemas.gift import ChatMessage, GiftCriteria, SuggestionSummary
from giftai.services.llm.dspy_client import GiftLLM, refinement_sampling
from giftai.services.llm.gift_generator import request_suggestions_text
from giftai.services.llm.prompt_builder import (
    build_discussion_prompt,
    build_intent_prompt,
    build_refinement_prompt,
)
from giftai.services.llm.prompts import (
    DISCUSSION_PROMPT_VERSION,
    GIFT_REFINE_PROMPT_VERSION,
    INTENT_CLASSIFY_PROMPT_VERSION,
)
from giftai.services.llm.suggestion_parser import try_parse_suggestions
from giftai.services.locale.currency import resolve_locale

logger = get_logger(__name__)


class Intent(str, Enum):
    REFINEMENT = "REFINEMENT"
    DISCUSSION = "DISCUSSION"


@dataclass(frozen=True)
class ValidatedSuggestions:
    suggestions: list[dict]


@dataclass(frozen=True)
class DiscussionReply:
    text: str
    fallback: bool = False  # True when a REFINEMENT reply failed validation


RefinementOutcome = Union[ValidatedSuggestions, DiscussionReply]


def parse_intent(raw: str) -> Intent:
    """First word of the reply, case-normalized; anything unrecognised is DISCUSSION."""
    words = re.findall(r"[A-Za-z]+", raw or "")
    if words and words[0].upper() == Intent.REFINEMENT.value:
        return Intent.REFINEMENT
    return Intent.DISCUSSION


def classify_intent(llm: GiftLLM, message: str) -> Intent:
    raw = llm.complete(
        "intent_classify",
        INTENT_CLASSIFY_PROMPT_VERSION,
        build_intent_prompt(message),
        sampling=refinement_sampling(llm.settings),
    )
    return parse_intent(raw)


def _discussion_reply(llm: GiftLLM, prompt: str) -> str:
    return llm.complete(
        "gift_discussion",
        DISCUSSION_PROMPT_VERSION,
        prompt,
        sampling=refinement_sampling(llm.settings),
    ).strip()


def refine_gifts(
    criteria: GiftCriteria,
    suggestions: Sequence[SuggestionSummary],
    chat_history: Sequence[ChatMessage],
    llm: GiftLLM,
) -> RefinementOutcome:
    if not chat_history or chat_history[-1].role != "user":
        raise InvalidInput("Invalid chat history format")
    missing = criteria.missing_fields()
    if missing:
        raise InvalidInput(f"Missing required fields in initialCriteria: {', '.join(missing)}")
    if not llm.configured:
        raise ConfigError("Gemini API key not configured")

    latest = chat_history[-1]
    earlier = chat_history[:-1]
    locale = resolve_locale(criteria.geography)
    sampling = refinement_sampling(llm.settings)

    try:
        intent = classify_intent(llm, latest.content)
        logger.info("gift.refine.intent intent=%s message=%s", intent.value, latest.content)

        fallback = False
        if intent is Intent.REFINEMENT:
            raw = request_suggestions_text(
                llm,
                build_refinement_prompt(criteria, suggestions, earlier, latest.content, locale),
                prompt_name="gift_refine",
                prompt_version=GIFT_REFINE_PROMPT_VERSION,
                sampling=sampling,
            )
            refined = try_parse_suggestions(raw)
            if refined is not None:
                logger.info("gift.refine.suggestions count=%s", len(refined))
                return ValidatedSuggestions(refined)
            logger.warning("gift.refine.invalid_json falling back to discussion")
            fallback = True

        text = _discussion_reply(
            llm, build_discussion_prompt(criteria, suggestions, earlier, latest.content, locale)
        )
        logger.info("gift.refine.discussion fallback=%s chars=%s", fallback, len(text))
        return DiscussionReply(text, fallback=fallback)
    except GiftAIError:
        raise
    except Exception as e:
        logger.error("gift.refine.llm_failed error=%s", e)
        raise map_upstream_error(e) from e
