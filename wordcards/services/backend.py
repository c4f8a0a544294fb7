"""Thin wrapper around the Supabase client used by the session and word store.

Every call translates library exceptions into ``wordcards.models.errors`` so
callers only deal with one error hierarchy.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

import httpx
from supabase import AuthError as SupabaseAuthError
from supabase import AuthRetryableError, Client, PostgrestAPIError, create_client

from wordcards.config import WORDS_TABLE, Settings
from wordcards.models.errors import (
    AuthError,
    BackendError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from wordcards.models.state import Identity, WordEntry

logger = logging.getLogger(__name__)

# PostgREST codes for expired JWTs and row-level security denials
_AUTH_CODES = frozenset({"PGRST301", "PGRST302", "42501"})


@contextmanager
def _translated(action: str) -> Iterator[None]:
    try:
        yield
    except BackendError:
        raise
    except AuthRetryableError as exc:
        raise NetworkError(f"{action}: {exc}") from exc
    except SupabaseAuthError as exc:
        raise AuthError(f"{action}: {exc}") from exc
    except PostgrestAPIError as exc:
        if exc.code in _AUTH_CODES:
            raise AuthError(f"{action}: {exc.message}") from exc
        raise BackendError(f"{action}: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"{action}: {exc}") from exc


def _user_identity(user: Any) -> Optional[Identity]:
    uid = getattr(user, "id", None)
    return str(uid) if uid else None


def _session_identity(session: Any) -> Optional[Identity]:
    if session is None:
        return None
    return _user_identity(getattr(session, "user", None))


class BackendClient:
    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self.settings = settings
        self._client = client

    def _connect(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            raise NetworkError("backend not configured: set SUPABASE_URL and SUPABASE_ANON_KEY")
        try:
            self._client = create_client(self.settings.supabase_url, self.settings.supabase_key)
        except Exception as exc:
            # ungültige URL oder ungültiger Schlüssel
            raise NetworkError(f"could not create backend client: {exc}") from exc
        return self._client

    # ---- Auth ----
    def get_session(self) -> Optional[Identity]:
        with _translated("getting session"):
            return _session_identity(self._connect().auth.get_session())

    def on_auth_state_change(self, callback: Callable[[Optional[Identity]], None]):
        """Register ``callback(identity_or_none)``; returns the subscription."""
        def _handler(event, session):
            logger.debug("Auth state change: %s", event)
            callback(_session_identity(session))

        with _translated("subscribing to auth state changes"):
            return self._connect().auth.on_auth_state_change(_handler)

    def sign_up(self, email: str, password: str) -> Optional[Identity]:
        with _translated("signing up"):
            res = self._connect().auth.sign_up({"email": email, "password": password})
        return _user_identity(getattr(res, "user", None))

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        with _translated("logging in"):
            res = self._connect().auth.sign_in_with_password({"email": email, "password": password})
        identity = _user_identity(getattr(res, "user", None))
        if identity is None:
            raise AuthError("logging in: no user in response")
        return identity

    def sign_out(self) -> None:
        with _translated("logging out"):
            self._connect().auth.sign_out()

    # ---- Rows ----
    def fetch_words(self, identity: Identity) -> list[WordEntry]:
        with _translated("fetching words"):
            res = self._connect().table(WORDS_TABLE).select("*").eq("user_id", identity).execute()
        return self._entries(res.data)

    def insert_word(self, word: str, meaning: str, identity: Identity) -> list[WordEntry]:
        if not word or not meaning:
            raise ValidationError("word and meaning are required")
        row = {"word": word, "meaning": meaning, "user_id": identity}
        with _translated("adding word"):
            res = self._connect().table(WORDS_TABLE).insert([row]).execute()
        return self._entries(res.data)

    def delete_word(self, entry_id: Any) -> None:
        with _translated("deleting word"):
            res = self._connect().table(WORDS_TABLE).delete().eq("id", entry_id).execute()
        if not res.data:
            raise NotFoundError(f"deleting word: no row with id {entry_id!r}")

    def _entries(self, rows) -> list[WordEntry]:
        out = []
        for row in rows or []:
            try:
                out.append(WordEntry.from_row(row))
            except ValidationError as exc:
                logger.warning("Skipping malformed row %r: %s", row.get("id"), exc)
        return out
