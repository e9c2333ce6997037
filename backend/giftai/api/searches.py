"""Saved searches, their suggestions and favorites for the signed-in user."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from giftai.api.deps import get_current_user
from giftai.errors import NotFound
from giftai.schemas.search import (
    FavoriteUpdate,
    SearchCreate,
    SearchRead,
    SuggestionRead,
    SuggestionsCreate,
)
from giftai.services.auth.supabase_auth import AuthUser
from giftai.storage.db import get_db_session
from giftai.storage.models import GiftSearch
from giftai.storage.repositories import (
    delete_gift_search,
    get_gift_search,
    get_suggestion,
    get_suggestions_for_search,
    get_user_favorites,
    get_user_gift_searches,
    save_gift_search,
    save_gift_suggestions,
    toggle_gift_favorite,
)

router = APIRouter()


def _search_read(session: Session, search: GiftSearch) -> SearchRead:
    suggestions = get_suggestions_for_search(session, search.id)
    return SearchRead(
        **search.model_dump(),
        gift_suggestions=[SuggestionRead.model_validate(s.model_dump()) for s in suggestions],
    )


def _owned_search(session: Session, search_id: str, user: AuthUser) -> GiftSearch:
    search = get_gift_search(session, search_id)
    if search is None or search.user_id != user.id:
        raise NotFound("Gift search not found")
    return search


@router.post("/searches", response_model=SearchRead, status_code=201)
def create_search(
    body: SearchCreate,
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> SearchRead:
    search = save_gift_search(session, user.id, body.criteria())
    if body.suggestions:
        save_gift_suggestions(session, search.id, [s.model_dump() for s in body.suggestions])
    return _search_read(session, search)


@router.post("/searches/{search_id}/suggestions", response_model=list[SuggestionRead], status_code=201)
def add_suggestions(
    search_id: str,
    body: SuggestionsCreate,
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> list[SuggestionRead]:
    """Save a batch of three, e.g. after a refinement."""
    search = _owned_search(session, search_id, user)
    saved = save_gift_suggestions(session, search.id, [s.model_dump() for s in body.suggestions])
    return [SuggestionRead.model_validate(s.model_dump()) for s in saved]


@router.get("/searches", response_model=list[SearchRead])
def list_searches(
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> list[SearchRead]:
    return [_search_read(session, s) for s in get_user_gift_searches(session, user.id)]


@router.get("/searches/{search_id}", response_model=SearchRead)
def read_search(
    search_id: str,
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> SearchRead:
    return _search_read(session, _owned_search(session, search_id, user))


@router.delete("/searches/{search_id}")
def remove_search(
    search_id: str,
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> dict:
    _owned_search(session, search_id, user)
    delete_gift_search(session, search_id)
    return {"ok": True}


@router.patch("/suggestions/{suggestion_id}/favorite", response_model=SuggestionRead)
def set_favorite(
    suggestion_id: str,
    body: FavoriteUpdate,
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> SuggestionRead:
    suggestion = get_suggestion(session, suggestion_id)
    if suggestion is None:
        raise NotFound("Gift suggestion not found")
    _owned_search(session, suggestion.search_id, user)
    updated = toggle_gift_favorite(session, suggestion_id, body.is_favorited)
    return SuggestionRead.model_validate(updated.model_dump())


@router.get("/favorites", response_model=list[SuggestionRead])
def list_favorites(
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> list[SuggestionRead]:
    return [SuggestionRead.model_validate(s.model_dump()) for s in get_user_favorites(session, user.id)]
