"""Currency and budget hints for the location field of the gift form."""

from fastapi import APIRouter, Query

from giftai.schemas.currency import CurrencyRead, LocationCurrencyResponse
from giftai.services.locale.currency import (
    get_location_display_name,
    get_suggested_budgets,
    resolve_locale,
)

router = APIRouter()


@router.get("/currency", response_model=LocationCurrencyResponse)
def get_location_currency(location: str = Query(default="")) -> LocationCurrencyResponse:
    locale = resolve_locale(location)
    currency = locale.currency
    return LocationCurrencyResponse(
        location=location,
        display_name=get_location_display_name(location),
        country=locale.country,
        matched_by=locale.matched_by,
        currency=CurrencyRead(symbol=currency.symbol, code=currency.code, name=currency.name),
        suggested_budgets=get_suggested_budgets(currency.code),
    )
