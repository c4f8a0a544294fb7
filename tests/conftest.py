"""Shared test fixtures for wordcards."""

import itertools

import pytest

from wordcards.models.errors import AuthError, NetworkError, NotFoundError
from wordcards.models.navigator import CardNavigator
from wordcards.models.state import WordEntry
from wordcards.persistence.word_store import WordListStore
from wordcards.services.session import SessionController
from wordcards.services.tasks import ImmediateRunner

USER = "user-1"
OTHER = "user-2"


class FakeSubscription:
    def __init__(self, backend):
        self.backend = backend
        self.active = True

    def unsubscribe(self):
        self.active = False


class FakeBackend:
    """In-memory stand-in for BackendClient.

    ``fail[name] = exc`` makes the next call of method ``name`` raise ``exc``.
    """

    def __init__(self, users=None):
        self.users = dict(users or {"ann@example.com": ("secret", USER)})
        self.rows = []
        self.session = None
        self.calls = []
        self.fail = {}
        self.subscriptions = []
        self._ids = itertools.count(1)

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        exc = self.fail.pop(name, None)
        if exc is not None:
            raise exc

    def call_names(self):
        return [c[0] for c in self.calls]

    def seed(self, owner, *pairs):
        out = []
        for word, meaning in pairs:
            e = WordEntry(id=next(self._ids), word=word, meaning=meaning, owner=owner)
            self.rows.append(e)
            out.append(e)
        return out

    def emit(self, identity):
        for sub in self.subscriptions:
            if sub.active:
                sub.callback(identity)

    # ---- BackendClient surface ----
    def get_session(self):
        self._call("get_session")
        return self.session

    def on_auth_state_change(self, callback):
        self._call("on_auth_state_change")
        sub = FakeSubscription(self)
        sub.callback = callback
        self.subscriptions.append(sub)
        return sub

    def sign_up(self, email, password):
        self._call("sign_up", email)
        if email in self.users:
            raise AuthError("User already registered")
        uid = f"user-{len(self.users) + 1}"
        self.users[email] = (password, uid)
        return uid

    def sign_in_with_password(self, email, password):
        self._call("sign_in_with_password", email)
        pw, uid = self.users.get(email, (None, None))
        if pw is None or pw != password:
            raise AuthError("Invalid login credentials")
        self.session = uid
        return uid

    def sign_out(self):
        self._call("sign_out")
        self.session = None

    def fetch_words(self, identity):
        self._call("fetch_words", identity)
        return [e for e in self.rows if e.owner == identity]

    def insert_word(self, word, meaning, identity):
        self._call("insert_word", word, meaning, identity)
        e = WordEntry(id=next(self._ids), word=word, meaning=meaning, owner=identity)
        self.rows.append(e)
        return [e]

    def delete_word(self, entry_id):
        self._call("delete_word", entry_id)
        before = len(self.rows)
        self.rows = [e for e in self.rows if e.id != entry_id]
        if len(self.rows) == before:
            raise NotFoundError(f"no row with id {entry_id!r}")


class DeferredRunner:
    """Queues calls until ``flush()``; models a pending backend request."""

    def __init__(self):
        self.pending = []
        self.posted = []

    def submit(self, call, on_result):
        self.pending.append((call, on_result))

    def post(self, fn):
        self.posted.append(fn)

    def flush(self):
        while self.pending or self.posted:
            while self.posted:
                self.posted.pop(0)()
            if self.pending:
                call, on_result = self.pending.pop(0)
                try:
                    result = call()
                except Exception as e:
                    on_result(None, e)
                else:
                    on_result(result, None)

    def shutdown(self):
        pass


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def runner():
    return ImmediateRunner()


@pytest.fixture
def store(backend, runner):
    return WordListStore(backend, runner)


@pytest.fixture
def navigator(store):
    return CardNavigator(store)


@pytest.fixture
def session(backend, store, runner):
    return SessionController(backend, store, runner)


@pytest.fixture
def loaded(backend, store, navigator):
    """Store loaded with apple, banana, cherry for USER."""
    backend.seed(USER, ("apple", "りんご"), ("banana", "バナナ"), ("cherry", "さくらんぼ"))
    store.load(USER)
    return store, navigator


@pytest.fixture
def network_down():
    return NetworkError("backend unreachable")
