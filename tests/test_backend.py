"""Tests for the Supabase wrapper and its error translation."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from supabase import PostgrestAPIError

from wordcards.config import Settings
from wordcards.models.errors import (
    AuthError,
    BackendError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from wordcards.services import backend as backend_mod
from wordcards.services.backend import BackendClient

SETTINGS = Settings(supabase_url="https://example.supabase.co", supabase_key="anon")


def rows_query(client):
    return client.table.return_value


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def api(client):
    return BackendClient(SETTINGS, client=client)


class TestConfiguration:

    def test_unconfigured_calls_fail_uniformly(self, monkeypatch):
        create = MagicMock()
        monkeypatch.setattr(backend_mod, "create_client", create)
        api = BackendClient(Settings())
        for call in (api.get_session, api.sign_out, lambda: api.fetch_words("u"),
                     lambda: api.sign_in_with_password("a@b.c", "pw")):
            with pytest.raises(NetworkError):
                call()
        create.assert_not_called()

    def test_invalid_key_is_network_error(self, monkeypatch):
        monkeypatch.setattr(backend_mod, "create_client", MagicMock(side_effect=Exception("Invalid API key")))
        with pytest.raises(NetworkError, match="Invalid API key"):
            BackendClient(SETTINGS).get_session()

    def test_client_created_once(self, monkeypatch):
        create = MagicMock()
        monkeypatch.setattr(backend_mod, "create_client", create)
        api = BackendClient(SETTINGS)
        api.get_session()
        api.sign_out()
        create.assert_called_once_with(SETTINGS.supabase_url, SETTINGS.supabase_key)


class TestAuth:

    def test_get_session_identity(self, api, client):
        client.auth.get_session.return_value = SimpleNamespace(user=SimpleNamespace(id="u1"))
        assert api.get_session() == "u1"

    def test_get_session_none(self, api, client):
        client.auth.get_session.return_value = None
        assert api.get_session() is None

    def test_sign_in_returns_identity(self, api, client):
        client.auth.sign_in_with_password.return_value = SimpleNamespace(user=SimpleNamespace(id="u1"), session=None)
        assert api.sign_in_with_password("a@b.c", "pw") == "u1"
        client.auth.sign_in_with_password.assert_called_once_with({"email": "a@b.c", "password": "pw"})

    def test_sign_in_without_user_is_auth_error(self, api, client):
        client.auth.sign_in_with_password.return_value = SimpleNamespace(user=None, session=None)
        with pytest.raises(AuthError):
            api.sign_in_with_password("a@b.c", "pw")

    def test_sign_up_passes_credentials(self, api, client):
        client.auth.sign_up.return_value = SimpleNamespace(user=SimpleNamespace(id="u9"), session=None)
        assert api.sign_up("a@b.c", "pw") == "u9"
        client.auth.sign_up.assert_called_once_with({"email": "a@b.c", "password": "pw"})

    def test_auth_change_callback_gets_identity(self, api, client):
        seen = []
        sub = api.on_auth_state_change(seen.append)
        handler = client.auth.on_auth_state_change.call_args[0][0]
        handler("SIGNED_IN", SimpleNamespace(user=SimpleNamespace(id="u1")))
        handler("SIGNED_OUT", None)
        assert seen == ["u1", None]
        assert sub is client.auth.on_auth_state_change.return_value

    def test_transport_error_is_network_error(self, api, client):
        client.auth.sign_out.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(NetworkError):
            api.sign_out()


class TestRows:

    def test_fetch_filters_by_owner(self, api, client):
        q = rows_query(client)
        q.select.return_value.eq.return_value.execute.return_value = SimpleNamespace(data=[
            {"id": 1, "word": "apple", "meaning": "りんご", "user_id": "u1"},
            {"id": 2, "word": "", "meaning": "broken", "user_id": "u1"},
        ])
        entries = api.fetch_words("u1")
        client.table.assert_called_with("words")
        q.select.return_value.eq.assert_called_once_with("user_id", "u1")
        assert [(e.id, e.word, e.meaning, e.owner) for e in entries] == [(1, "apple", "りんご", "u1")]

    def test_insert_returns_created_rows(self, api, client):
        q = rows_query(client)
        q.insert.return_value.execute.return_value = SimpleNamespace(data=[
            {"id": 7, "word": "apple", "meaning": "りんご", "user_id": "u1"},
        ])
        entries = api.insert_word("apple", "りんご", "u1")
        q.insert.assert_called_once_with([{"word": "apple", "meaning": "りんご", "user_id": "u1"}])
        assert entries[0].id == 7

    def test_insert_empty_never_reaches_backend(self, api, client):
        with pytest.raises(ValidationError):
            api.insert_word("", "りんご", "u1")
        client.table.assert_not_called()

    def test_delete_by_id(self, api, client):
        q = rows_query(client)
        q.delete.return_value.eq.return_value.execute.return_value = SimpleNamespace(data=[{"id": 7}])
        api.delete_word(7)
        q.delete.return_value.eq.assert_called_once_with("id", 7)

    def test_delete_missing_row(self, api, client):
        q = rows_query(client)
        q.delete.return_value.eq.return_value.execute.return_value = SimpleNamespace(data=[])
        with pytest.raises(NotFoundError):
            api.delete_word(7)

    def test_rls_denial_is_auth_error(self, api, client):
        q = rows_query(client)
        q.select.return_value.eq.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "permission denied for table words", "code": "42501"})
        with pytest.raises(AuthError):
            api.fetch_words("u1")

    def test_other_api_error_is_backend_error(self, api, client):
        q = rows_query(client)
        q.insert.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "relation does not exist", "code": "42P01"})
        with pytest.raises(BackendError) as info:
            api.insert_word("apple", "りんご", "u1")
        assert not isinstance(info.value, AuthError)
