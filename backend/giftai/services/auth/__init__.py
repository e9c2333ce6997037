"""Hosted auth provider client."""

from giftai.services.auth.supabase_auth import AuthSession, AuthUser, SupabaseAuthClient

__all__ = ["AuthSession", "AuthUser", "SupabaseAuthClient"]
