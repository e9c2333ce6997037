"""
Request dependencies.

The model and auth clients are built once per process from Settings and kept
on app.state; tests swap them through app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from giftai.config import Settings, get_settings
from giftai.errors import AuthError
from giftai.services.auth.supabase_auth import AuthUser, SupabaseAuthClient
from giftai.services.llm.dspy_client import GiftLLM


def get_gift_llm(request: Request, settings: Settings = Depends(get_settings)) -> GiftLLM:
    llm = getattr(request.app.state, "gift_llm", None)
    if llm is None:
        llm = GiftLLM(settings)
        request.app.state.gift_llm = llm
    return llm


def get_auth_client(request: Request, settings: Settings = Depends(get_settings)) -> SupabaseAuthClient:
    client = getattr(request.app.state, "auth_client", None)
    if client is None:
        client = SupabaseAuthClient(settings)
        request.app.state.auth_client = client
    return client


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError()
    return token.strip()


def get_current_user(
    token: str = Depends(get_bearer_token),
    auth: SupabaseAuthClient = Depends(get_auth_client),
) -> AuthUser:
    return auth.get_user(token)
