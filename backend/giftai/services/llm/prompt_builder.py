"""
Prompt assembly for gift generation, refinement, intent and discussion calls.

Country-specific shopping guidance is keyed off the resolved locale, so the
generation and refinement prompts always agree with the currency shown.
"""

from typing import Sequence

from giftai.schemas.gift import ChatMessage, GiftCriteria, SuggestionSummary
from giftai.services.llm.prompts import (
    AGE_TARGETING_RULES,
    DISCUSSION_TEMPLATE,
    GIFT_GENERATE_TEMPLATE,
    GIFT_REFINE_TEMPLATE,
    INTENT_CLASSIFY_TEMPLATE,
)
from giftai.services.llm.shopping_platforms import region_for_country
from giftai.services.locale.currency import (
    ResolvedLocale,
    format_currency,
    resolve_locale,
    round_half_up,
)

PRICE_FLOOR_RATIO = 0.7
PRICE_CEILING_RATIO = 1.1


def age_search_terms(age: float) -> str:
    if 18 <= age <= 25:
        return "young adult, college, university, teen, youth"
    if 26 <= age <= 35:
        return "adult, professional, millennial"
    if 36 <= age <= 50:
        return "adult, mature, professional"
    if age > 50:
        return "adult, senior, mature"
    return "adult"


def gender_search_term(gender: str) -> str:
    """Adult gender keyword for search URLs; never boys/girls."""
    g = (gender or "").lower()
    if "female" in g or "woman" in g:
        return "women"
    if "male" in g or "man" in g:
        return "men"
    return "adult"


def price_bounds(budget: float) -> tuple[int, int]:
    return round_half_up(budget * PRICE_FLOOR_RATIO), round_half_up(budget * PRICE_CEILING_RATIO)


def shopping_guidance(locale: ResolvedLocale, budget: float, age: float, gender: str) -> str:
    region = region_for_country(locale.country)
    currency = locale.currency
    min_price, max_price = price_bounds(budget)
    gender_term = gender_search_term(gender)
    values = {
        "gender": gender_term,
        "min": min_price,
        "max": max_price,
        "min_cents": min_price * 100,
        "max_cents": max_price * 100,
    }

    lines = [
        f"For shopping links, use these verified {region.label} platforms with {region.header_focus} "
        "and AGE-APPROPRIATE SEARCH TERMS:",
        "",
        f"CRITICAL: Always include age-appropriate terms ({age_search_terms(age)}) and gender terms "
        f"({gender_term}) in search queries.{region.extra_rule}",
        "",
    ]
    for platform in region.platforms:
        lines.append(f'- "{platform.name}": Use URL format "{platform.url_format.format(**values)}"')
        if platform.note:
            lines.append(f"  Note: {platform.note} Suggest products that typically fall within the budget range.")
    lines.append("")
    if region.footer:
        lines.extend([region.footer, ""])
    lines.append(
        "CRITICAL: Replace SPECIFIC_SEARCH_TERMS with exact product keywords + age-appropriate terms. "
        f"Price ranges in {currency.code} ({currency.symbol}{min_price}-{max_price})"
    )
    return "\n".join(lines)


def format_chat_context(history: Sequence[ChatMessage]) -> str:
    """Transcript of earlier turns, from the advisor's point of view."""
    return "\n".join(
        f"{'You' if msg.role == 'user' else 'Me'}: {msg.content}" for msg in history
    )


def _format_suggestions(suggestions: Sequence[SuggestionSummary], with_reason: bool) -> str:
    out = []
    for i, gift in enumerate(suggestions, start=1):
        line = f"{i}. **{gift.name}**: {gift.description}"
        if with_reason and gift.reason:
            line += f" (Perfect because: {gift.reason})"
        out.append(line)
    return "\n".join(out)


def _common_fields(criteria: GiftCriteria, locale: ResolvedLocale) -> dict:
    return {
        "occasion": criteria.occasion,
        "age": criteria.age,
        "gender": criteria.gender,
        "personality": criteria.personality,
        "geography": criteria.geography,
        "formatted_budget": format_currency(criteria.budget, locale.currency),
        "currency_code": locale.currency.code,
        "currency_symbol": locale.currency.symbol,
    }


def build_generation_prompt(criteria: GiftCriteria, locale: ResolvedLocale | None = None) -> str:
    locale = locale or resolve_locale(criteria.geography)
    return GIFT_GENERATE_TEMPLATE.format(
        **_common_fields(criteria, locale),
        age_rules=AGE_TARGETING_RULES,
        shopping_guidance=shopping_guidance(locale, criteria.budget, criteria.age, criteria.gender),
    )


def build_intent_prompt(message: str) -> str:
    return INTENT_CLASSIFY_TEMPLATE.format(message=message)


def build_refinement_prompt(
    criteria: GiftCriteria,
    suggestions: Sequence[SuggestionSummary],
    history: Sequence[ChatMessage],
    message: str,
    locale: ResolvedLocale | None = None,
) -> str:
    locale = locale or resolve_locale(criteria.geography)
    chat_context = format_chat_context(history)
    return GIFT_REFINE_TEMPLATE.format(
        **_common_fields(criteria, locale),
        current_suggestions=_format_suggestions(suggestions, with_reason=False),
        chat_section=f"**Our conversation so far:**\n{chat_context}\n\n" if chat_context else "",
        message=message,
        age_rules=AGE_TARGETING_RULES,
        shopping_guidance=shopping_guidance(locale, criteria.budget, criteria.age, criteria.gender),
    )


def build_discussion_prompt(
    criteria: GiftCriteria,
    suggestions: Sequence[SuggestionSummary],
    history: Sequence[ChatMessage],
    message: str,
    locale: ResolvedLocale | None = None,
) -> str:
    locale = locale or resolve_locale(criteria.geography)
    chat_context = format_chat_context(history)
    return DISCUSSION_TEMPLATE.format(
        **_common_fields(criteria, locale),
        current_suggestions=_format_suggestions(suggestions, with_reason=True),
        chat_section=f"**Our chat so far:**\n{chat_context}\n\n" if chat_context else "",
        message=message,
    )
