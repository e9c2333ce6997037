import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid.uuid4())


class GiftSearch(SQLModel, table=True):
    __tablename__ = "gift_searches"

    id: str = Field(default_factory=_uuid, primary_key=True)
    user_id: str = Field(index=True)
    occasion: str
    age: int
    gender: str
    personality: str
    budget: float
    geography: str
    created_at: datetime = Field(default_factory=utc_now)


class GiftSuggestion(SQLModel, table=True):
    __tablename__ = "gift_suggestions"

    id: str = Field(default_factory=_uuid, primary_key=True)
    # Cascade lives in the store: deleting a search removes its suggestions.
    search_id: str = Field(foreign_key="gift_searches.id", ondelete="CASCADE", index=True)
    name: str
    description: str
    reason: str
    shopping_links: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_favorited: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class UserProfile(SQLModel, table=True):
    """Mirror of the auth provider's user; id is the provider's user id."""

    __tablename__ = "user_profiles"

    id: str = Field(primary_key=True)
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class LLMCallLog(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    prompt_name: str
    prompt_version: str
    model: str
    input_payload: str
    output_payload: str
    latency_ms: int
    created_at: datetime = Field(default_factory=utc_now)
