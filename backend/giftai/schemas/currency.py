from typing import Optional

from pydantic import BaseModel


class CurrencyRead(BaseModel):
    symbol: str
    code: str
    name: str


class LocationCurrencyResponse(BaseModel):
    location: str
    display_name: str
    country: Optional[str]
    matched_by: str
    currency: CurrencyRead
    suggested_budgets: list[int]
