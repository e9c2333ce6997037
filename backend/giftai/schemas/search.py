from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from giftai.schemas.gift import GiftSuggestion, ShoppingLink


class SearchCreate(BaseModel):
    occasion: str = Field(min_length=1)
    age: int = Field(ge=1, le=120)
    gender: str = Field(min_length=1)
    personality: str = Field(min_length=1)
    budget: float = Field(gt=0)
    geography: str = Field(min_length=1)
    # Optional first batch, saved with the search
    suggestions: Optional[list[GiftSuggestion]] = Field(default=None, min_length=3, max_length=3)

    def criteria(self) -> dict:
        return self.model_dump(exclude={"suggestions"})


class SuggestionsCreate(BaseModel):
    suggestions: list[GiftSuggestion] = Field(min_length=3, max_length=3)


class SuggestionRead(BaseModel):
    id: str
    search_id: str
    name: str
    description: str
    reason: str
    shopping_links: list[ShoppingLink]
    is_favorited: bool
    created_at: datetime


class SearchRead(BaseModel):
    id: str
    user_id: str
    occasion: str
    age: int
    gender: str
    personality: str
    budget: float
    geography: str
    created_at: datetime
    gift_suggestions: list[SuggestionRead] = []


class FavoriteUpdate(BaseModel):
    """Omit is_favorited to flip the current value."""

    is_favorited: Optional[bool] = None
