"""Sign-up, sign-in, session and profile endpoints backed by the auth provider."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from giftai.api.deps import get_auth_client, get_bearer_token, get_current_user
from giftai.errors import NotFound
from giftai.logging import get_logger
from giftai.schemas.auth import (
    EmailRequest,
    PasswordUpdateRequest,
    ProfileRead,
    ProfileUpdate,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserRead,
)
from giftai.services.auth.supabase_auth import AuthSession, AuthUser, SupabaseAuthClient
from giftai.storage.db import get_db_session
from giftai.storage.repositories import ensure_user_profile, update_user_profile

router = APIRouter()
logger = get_logger(__name__)


def _user_read(user: AuthUser) -> UserRead:
    return UserRead(id=user.id, email=user.email, email_confirmed=user.email_confirmed)


def _session_response(session: Session, auth_session: AuthSession) -> SessionResponse:
    user = auth_session.user
    profile = ensure_user_profile(session, user.id, user.email, user.full_name)
    return SessionResponse(
        user=_user_read(user),
        access_token=auth_session.access_token,
        refresh_token=auth_session.refresh_token,
        expires_in=auth_session.expires_in,
        profile=ProfileRead.model_validate(profile.model_dump()),
    )


@router.post("/auth/signup", response_model=SessionResponse, status_code=201)
def sign_up(
    body: SignUpRequest,
    auth: SupabaseAuthClient = Depends(get_auth_client),
    session: Session = Depends(get_db_session),
) -> SessionResponse:
    return _session_response(session, auth.sign_up(body.email, body.password, body.full_name))


@router.post("/auth/signin", response_model=SessionResponse)
def sign_in(
    body: SignInRequest,
    auth: SupabaseAuthClient = Depends(get_auth_client),
    session: Session = Depends(get_db_session),
) -> SessionResponse:
    return _session_response(session, auth.sign_in(body.email, body.password))


@router.get("/auth/session", response_model=SessionResponse)
def read_session(
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> SessionResponse:
    return _session_response(session, AuthSession(user=user))


@router.post("/auth/signout")
def sign_out(
    token: str = Depends(get_bearer_token),
    auth: SupabaseAuthClient = Depends(get_auth_client),
) -> dict:
    auth.sign_out(token)
    return {"ok": True}


@router.post("/auth/reset-password")
def reset_password(body: EmailRequest, auth: SupabaseAuthClient = Depends(get_auth_client)) -> dict:
    auth.reset_password(body.email)
    return {"ok": True}


@router.post("/auth/update-password", response_model=UserRead)
def update_password(
    body: PasswordUpdateRequest,
    token: str = Depends(get_bearer_token),
    auth: SupabaseAuthClient = Depends(get_auth_client),
) -> UserRead:
    return _user_read(auth.update_password(token, body.password))


@router.post("/auth/resend-confirmation")
def resend_confirmation(body: EmailRequest, auth: SupabaseAuthClient = Depends(get_auth_client)) -> dict:
    auth.resend_confirmation(body.email)
    return {"ok": True}


@router.get("/profile", response_model=ProfileRead)
def read_profile(
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> ProfileRead:
    profile = ensure_user_profile(session, user.id, user.email, user.full_name)
    return ProfileRead.model_validate(profile.model_dump())


@router.patch("/profile", response_model=ProfileRead)
def patch_profile(
    body: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
    session: Session = Depends(get_db_session),
) -> ProfileRead:
    ensure_user_profile(session, user.id, user.email, user.full_name)
    profile = update_user_profile(session, user.id, body.model_dump(exclude_unset=True))
    if profile is None:
        raise NotFound("Profile not found")
    logger.info("user_profile.updated id=%s fields=%s", user.id, ",".join(body.model_dump(exclude_unset=True)))
    return ProfileRead.model_validate(profile.model_dump())
