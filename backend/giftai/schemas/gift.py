from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CRITERIA_FIELDS = ("occasion", "age", "gender", "personality", "budget", "geography")


class ShoppingLink(BaseModel):
    platform: str = Field(min_length=1)
    url: str = Field(min_length=1)
    price_range: str = Field(min_length=1)


class GiftSuggestion(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    reason: str = Field(min_length=1)
    shopping_links: list[ShoppingLink] = Field(min_length=1)


class SuggestionSummary(BaseModel):
    """A suggestion the client already holds; only used as prompt context."""

    name: str
    description: str = ""
    reason: str = ""
    shopping_links: list[ShoppingLink] = []


class GiftCriteria(BaseModel):
    """Recipient criteria. Fields are optional here so a missing one is a 400, not a 422."""

    occasion: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=1, le=120)
    gender: Optional[str] = None
    personality: Optional[str] = None
    budget: Optional[float] = Field(default=None, gt=0)
    geography: Optional[str] = None

    def missing_fields(self) -> list[str]:
        missing = []
        for name in CRITERIA_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[str] = None


class RefineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    initial_criteria: Optional[GiftCriteria] = Field(default=None, alias="initialCriteria")
    initial_suggestions: Optional[list[SuggestionSummary]] = Field(default=None, alias="initialSuggestions")
    chat_history: Optional[list[ChatMessage]] = Field(default=None, alias="chatHistory")

    def missing_fields(self) -> list[str]:
        missing = []
        if self.initial_criteria is None:
            missing.append("initialCriteria")
        if self.initial_suggestions is None:
            missing.append("initialSuggestions")
        if self.chat_history is None:
            missing.append("chatHistory")
        return missing
