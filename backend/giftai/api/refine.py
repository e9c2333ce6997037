from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from giftai.api.deps import get_gift_llm
from giftai.errors import InvalidInput
from giftai.logging import get_logger
from giftai.schemas.gift import RefineRequest
from giftai.services.llm.dspy_client import GiftLLM
from giftai.services.llm.gift_refiner import ValidatedSuggestions, refine_gifts
from giftai.utils.timing import time_span

router = APIRouter()
logger = get_logger(__name__)


@router.post("/refine-gift")
def refine_gift(body: RefineRequest, llm: GiftLLM = Depends(get_gift_llm)) -> Response:
    """
    Chat follow-up on a suggestion set.
    Returns a JSON array of three new suggestions, or a text/plain reply.
    """
    if body.missing_fields():
        raise InvalidInput("Missing required fields: initialCriteria, initialSuggestions, chatHistory")

    with time_span("gift.refine.total", turns=len(body.chat_history)):
        outcome = refine_gifts(body.initial_criteria, body.initial_suggestions, body.chat_history, llm)

    if isinstance(outcome, ValidatedSuggestions):
        return JSONResponse(outcome.suggestions, media_type="application/json")
    return PlainTextResponse(outcome.text, media_type="text/plain")
