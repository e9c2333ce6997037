from typing import Iterable, Optional

from sqlmodel import Session, col, select

from giftai.errors import InvalidInput
from giftai.logging import get_logger
from giftai.storage.models import GiftSearch, GiftSuggestion, LLMCallLog, UserProfile, utc_now

logger = get_logger(__name__)

PROFILE_UPDATABLE_FIELDS = ("full_name", "avatar_url")
SUGGESTION_BATCH_SIZE = 3


def save_gift_search(session: Session, user_id: str, criteria: dict) -> GiftSearch:
    search = GiftSearch(user_id=user_id, **criteria)
    session.add(search)
    session.commit()
    session.refresh(search)
    logger.info("gift_search.created id=%s user_id=%s occasion=%s", search.id, user_id, search.occasion)
    return search


def save_gift_suggestions(
    session: Session, search_id: str, suggestions: Iterable[dict]
) -> list[GiftSuggestion]:
    """Suggestions are stored in batches of exactly SUGGESTION_BATCH_SIZE."""
    suggestions = list(suggestions)
    if len(suggestions) != SUGGESTION_BATCH_SIZE:
        raise InvalidInput(
            f"Expected {SUGGESTION_BATCH_SIZE} gift suggestions per batch, got {len(suggestions)}"
        )
    items = [
        GiftSuggestion(
            search_id=search_id,
            name=s["name"],
            description=s["description"],
            reason=s["reason"],
            shopping_links=list(s.get("shopping_links") or []),
        )
        for s in suggestions
    ]
    session.add_all(items)
    session.commit()
    for item in items:
        session.refresh(item)
    logger.info("gift_suggestions.created search_id=%s count=%s", search_id, len(items))
    return items


def get_suggestions_for_search(session: Session, search_id: str) -> list[GiftSuggestion]:
    return list(
        session.exec(
            select(GiftSuggestion)
            .where(GiftSuggestion.search_id == search_id)
            .order_by(col(GiftSuggestion.created_at))
        )
    )


def get_gift_search(session: Session, search_id: str) -> Optional[GiftSearch]:
    return session.get(GiftSearch, search_id)


def get_user_gift_searches(session: Session, user_id: str) -> list[GiftSearch]:
    """Newest first."""
    return list(
        session.exec(
            select(GiftSearch)
            .where(GiftSearch.user_id == user_id)
            .order_by(col(GiftSearch.created_at).desc())
        )
    )


def get_suggestion(session: Session, suggestion_id: str) -> Optional[GiftSuggestion]:
    return session.get(GiftSuggestion, suggestion_id)


def toggle_gift_favorite(
    session: Session, suggestion_id: str, is_favorited: Optional[bool] = None
) -> Optional[GiftSuggestion]:
    """Set the favorite flag, or flip it when no value is given. Last write wins."""
    suggestion = session.get(GiftSuggestion, suggestion_id)
    if suggestion is None:
        return None
    suggestion.is_favorited = (not suggestion.is_favorited) if is_favorited is None else is_favorited
    session.add(suggestion)
    session.commit()
    session.refresh(suggestion)
    logger.info("gift_suggestion.favorite id=%s is_favorited=%s", suggestion.id, suggestion.is_favorited)
    return suggestion


def get_user_favorites(session: Session, user_id: str) -> list[GiftSuggestion]:
    """Favorited suggestions across the user's searches, newest first."""
    return list(
        session.exec(
            select(GiftSuggestion)
            .join(GiftSearch, col(GiftSearch.id) == col(GiftSuggestion.search_id))
            .where(GiftSearch.user_id == user_id, col(GiftSuggestion.is_favorited).is_(True))
            .order_by(col(GiftSuggestion.created_at).desc())
        )
    )


def delete_gift_search(session: Session, search_id: str) -> bool:
    search = session.get(GiftSearch, search_id)
    if search is None:
        return False
    session.delete(search)
    session.commit()
    logger.info("gift_search.deleted id=%s", search_id)
    return True


def get_user_profile(session: Session, user_id: str) -> Optional[UserProfile]:
    return session.get(UserProfile, user_id)


def ensure_user_profile(
    session: Session, user_id: str, email: str, full_name: Optional[str] = None
) -> UserProfile:
    profile = session.get(UserProfile, user_id)
    if profile:
        return profile
    profile = UserProfile(id=user_id, email=email, full_name=full_name or None)
    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info("user_profile.created id=%s", user_id)
    return profile


def update_user_profile(session: Session, user_id: str, updates: dict) -> Optional[UserProfile]:
    profile = session.get(UserProfile, user_id)
    if profile is None:
        return None
    for field in PROFILE_UPDATABLE_FIELDS:
        if field in updates:
            setattr(profile, field, updates[field])
    profile.updated_at = utc_now()
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def log_llm_call(
    session: Session,
    prompt_name: str,
    prompt_version: str,
    model: str,
    input_payload: str,
    output_payload: str,
    latency_ms: int,
) -> None:
    session.add(
        LLMCallLog(
            prompt_name=prompt_name,
            prompt_version=prompt_version,
            model=model,
            input_payload=input_payload,
            output_payload=output_payload,
            latency_ms=latency_ms,
        )
    )
    session.commit()
