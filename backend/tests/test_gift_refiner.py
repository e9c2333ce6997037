import pytest

from giftai.errors import InvalidInput
from giftai.schemas.gift import ChatMessage, GiftCriteria, SuggestionSummary
from giftai.services.llm.gift_refiner import (
    DiscussionReply,
    Intent,
    ValidatedSuggestions,
    parse_intent,
    refine_gifts,
)


@pytest.mark.parametrize(
    "raw,intent",
    [
        ("REFINEMENT", Intent.REFINEMENT),
        ("refinement", Intent.REFINEMENT),
        ('"REFINEMENT"', Intent.REFINEMENT),
        ("Refinement - the user wants changes", Intent.REFINEMENT),
        ("DISCUSSION", Intent.DISCUSSION),
        ("I think this is a REFINEMENT", Intent.DISCUSSION),
        ("", Intent.DISCUSSION),
    ],
)
def test_parse_intent(raw, intent):
    assert parse_intent(raw) is intent


def _inputs(criteria, suggestions):
    return (
        GiftCriteria(**criteria),
        [SuggestionSummary(**s) for s in suggestions],
        [ChatMessage(role="user", content="Different ideas please")],
    )


def test_refine_gifts_validated(fake_llm, criteria, suggestions, suggestions_json):
    fake_llm.queue("intent_classify", "REFINEMENT")
    fake_llm.queue("gift_refine", suggestions_json)
    outcome = refine_gifts(*_inputs(criteria, suggestions), fake_llm)
    assert isinstance(outcome, ValidatedSuggestions)
    assert len(outcome.suggestions) == 3


def test_refine_gifts_fallback_is_flagged(fake_llm, criteria, suggestions):
    fake_llm.queue("intent_classify", "REFINEMENT")
    fake_llm.queue("gift_refine", "not json")
    fake_llm.queue("gift_discussion", "Let's chat.")
    outcome = refine_gifts(*_inputs(criteria, suggestions), fake_llm)
    assert outcome == DiscussionReply("Let's chat.", fallback=True)


def test_refine_gifts_discussion(fake_llm, criteria, suggestions):
    fake_llm.queue("intent_classify", "DISCUSSION")
    fake_llm.queue("gift_discussion", "Great question!")
    outcome = refine_gifts(*_inputs(criteria, suggestions), fake_llm)
    assert outcome == DiscussionReply("Great question!")


def test_refine_gifts_requires_trailing_user_message(fake_llm, criteria, suggestions):
    gift_criteria, summaries, _ = _inputs(criteria, suggestions)
    history = [ChatMessage(role="assistant", content="Hi!")]
    with pytest.raises(InvalidInput):
        refine_gifts(gift_criteria, summaries, history, fake_llm)
