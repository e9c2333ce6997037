from fastapi import APIRouter, Depends

from giftai.api.deps import get_gift_llm
from giftai.errors import InvalidInput
from giftai.logging import get_logger
from giftai.schemas.gift import CRITERIA_FIELDS, GiftCriteria
from giftai.services.llm.dspy_client import GiftLLM
from giftai.services.llm.gift_generator import generate_gift_suggestions
from giftai.utils.timing import time_span

router = APIRouter()
logger = get_logger(__name__)


@router.post("/generate-gift")
def generate_gift(criteria: GiftCriteria, llm: GiftLLM = Depends(get_gift_llm)) -> list[dict]:
    """
    Three gift suggestions for the recipient criteria.
    All six fields are required; the model is not called when any is missing.
    """
    missing = criteria.missing_fields()
    if missing:
        logger.info("gift.generate.invalid missing=%s", ",".join(missing))
        raise InvalidInput(f"Missing required fields: {', '.join(CRITERIA_FIELDS)}")

    with time_span("gift.generate.total", occasion=criteria.occasion):
        return generate_gift_suggestions(criteria, llm)
