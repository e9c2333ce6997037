"""
Client for the hosted auth provider's REST API (Supabase GoTrue).

Every call is a single blocking httpx request. Provider rejections are raised
as AuthError (401) carrying a user-facing message; an unreachable provider is
an InternalError (500).
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from giftai.config import Settings
from giftai.errors import AuthError, ConfigError, InternalError
from giftai.logging import get_logger

logger = get_logger(__name__)

# Provider message fragment -> user-facing message
AUTH_ERROR_MESSAGES: dict[str, str] = {
    "Invalid login credentials": "Invalid email or password. Please check your credentials and try again.",
    "Email not confirmed": "Please check your email and click the confirmation link before signing in.",
    "User not found": "No account found with this email address.",
    "Invalid email": "Please enter a valid email address.",
    "Password should be at least 6 characters": "Password must be at least 6 characters long.",
    "User already registered": "An account with this email already exists. Try signing in instead.",
    "Signup requires a valid password": "Please enter a valid password.",
    "Only an email address is required to send a password reset": "Please enter your email address.",
    "Password reset requires a valid email": "Please enter a valid email address.",
    "Email rate limit exceeded": "Too many emails sent. Please wait a few minutes before trying again.",
    "Too many requests": "Too many attempts. Please wait a few minutes before trying again.",
}


def friendly_auth_message(message: Optional[str]) -> str:
    if not message:
        return "An unknown error occurred"
    if message in AUTH_ERROR_MESSAGES:
        return AUTH_ERROR_MESSAGES[message]
    lowered = message.lower()
    for key, value in AUTH_ERROR_MESSAGES.items():
        if key.lower() in lowered:
            return value
    return message


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str
    email_confirmed_at: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def email_confirmed(self) -> bool:
        return self.email_confirmed_at is not None

    @classmethod
    def from_payload(cls, data: dict) -> "AuthUser":
        metadata = data.get("user_metadata") or {}
        return cls(
            id=str(data["id"]),
            email=data.get("email") or "",
            email_confirmed_at=data.get("email_confirmed_at"),
            full_name=metadata.get("full_name") or None,
        )


@dataclass(frozen=True)
class AuthSession:
    user: AuthUser
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class SupabaseAuthClient:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.base_url = settings.supabase_url.rstrip("/") + "/auth/v1"
        self.timeout = settings.auth_timeout_s

    def _headers(self, access_token: Optional[str] = None) -> dict[str, str]:
        if not self.settings.auth_configured:
            raise ConfigError("Authentication provider not configured")
        headers = {"apikey": self.settings.supabase_anon_key, "Content-Type": "application/json"}
        headers["Authorization"] = f"Bearer {access_token or self.settings.supabase_anon_key}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        headers = self._headers(access_token)
        try:
            resp = httpx.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("auth.request_failed path=%s error=%s", path, e)
            raise InternalError("Authentication service unavailable. Please try again later.") from e
        if resp.status_code >= 400:
            message = _provider_message(resp)
            logger.warning("auth.provider_error path=%s status=%s message=%s", path, resp.status_code, message)
            raise AuthError(friendly_auth_message(message))
        if not resp.content:
            return {}
        return resp.json()

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> AuthSession:
        data = self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name or ""}},
            params={"redirect_to": self.settings.auth_redirect_url},
        )
        # With email confirmation on, the provider returns the bare user and no session.
        user_payload = data.get("user") or data
        logger.info("auth.sign_up email=%s", email)
        return _session_from(data, AuthUser.from_payload(user_payload))

    def sign_in(self, email: str, password: str) -> AuthSession:
        data = self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        logger.info("auth.sign_in email=%s", email)
        return _session_from(data, AuthUser.from_payload(data["user"]))

    def get_user(self, access_token: str) -> AuthUser:
        return AuthUser.from_payload(self._request("GET", "/user", access_token=access_token))

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/logout", access_token=access_token)

    def reset_password(self, email: str) -> None:
        self._request(
            "POST",
            "/recover",
            json={"email": email},
            params={"redirect_to": self.settings.auth_redirect_url},
        )

    def update_password(self, access_token: str, new_password: str) -> AuthUser:
        data = self._request("PUT", "/user", access_token=access_token, json={"password": new_password})
        return AuthUser.from_payload(data)

    def resend_confirmation(self, email: str) -> None:
        self._request(
            "POST",
            "/resend",
            json={"type": "signup", "email": email},
            params={"redirect_to": self.settings.auth_redirect_url},
        )


def _provider_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict):
        return body.get("msg") or body.get("error_description") or body.get("message") or body.get("error") or ""
    return str(body)


def _session_from(data: dict, user: AuthUser) -> AuthSession:
    return AuthSession(
        user=user,
        access_token=data.get("access_token"),
        refresh_token=data.get("refresh_token"),
        expires_in=data.get("expires_in"),
    )
