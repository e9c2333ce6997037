from giftai.errors import ConfigError, GiftAIError, InternalError, map_upstream_error
from giftai.logging import get_logger
from giftai.schemas.gift import GiftCriteria
from giftai.services.llm.dspy_client import GiftLLM, SamplingConfig, generation_sampling
from giftai.services.llm.prompt_builder import build_generation_prompt
from giftai.services.llm.prompts import GIFT_GENERATE_PROMPT_VERSION
from giftai.services.llm.suggestion_parser import parse_suggestions
from giftai.services.locale.currency import resolve_locale

logger = get_logger(__name__)


def request_suggestions_text(
    llm: GiftLLM, prompt: str, *, prompt_name: str, prompt_version: str, sampling: SamplingConfig
) -> str:
    """One model call returning the raw suggestions text (JSON array, maybe fenced)."""
    return llm.complete(prompt_name, prompt_version, prompt, sampling=sampling)


def generate_gift_suggestions(criteria: GiftCriteria, llm: GiftLLM) -> list[dict]:
    """
    Build the generation prompt, call the model once and return exactly three
    validated suggestions. Raises a GiftAIError subclass on any failure.
    """
    if not llm.configured:
        raise ConfigError("Gemini API key not configured")

    locale = resolve_locale(criteria.geography)
    logger.info(
        "gift.generate.start occasion=%s age=%s country=%s currency=%s",
        criteria.occasion,
        criteria.age,
        locale.country,
        locale.currency.code,
    )
    prompt = build_generation_prompt(criteria, locale)
    try:
        raw = request_suggestions_text(
            llm,
            prompt,
            prompt_name="gift_generate",
            prompt_version=GIFT_GENERATE_PROMPT_VERSION,
            sampling=generation_sampling(llm.settings),
        )
    except GiftAIError:
        raise
    except Exception as e:
        logger.error("gift.generate.llm_failed error=%s", e)
        raise map_upstream_error(e) from e

    if not raw.strip():
        logger.error("gift.generate.empty_response")
        raise InternalError()
    suggestions = parse_suggestions(raw)
    logger.info("gift.generate.end count=%s", len(suggestions))
    return suggestions
