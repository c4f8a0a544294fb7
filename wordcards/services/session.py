"""Authentication state for the trainer.

The controller is the only component that changes who is signed in. Every
transition to a user triggers a word list load; every transition away from one
empties the list so words of different users never mix.
"""

from __future__ import annotations

import logging
from typing import Optional

from wordcards.models.errors import BackendError
from wordcards.models.state import AuthState, Identity, Observable

logger = logging.getLogger(__name__)


class SessionController(Observable):
    def __init__(self, backend, store, runner):
        super().__init__()
        self.backend = backend
        self.store = store
        self.runner = runner
        self.state = AuthState.UNKNOWN
        self.identity: Optional[Identity] = None
        self._subscription = None

    # ---- Lifecycle ----
    def start(self):
        """Subscribe to auth state notifications. Safe to call twice."""
        if self._subscription is not None:
            return
        try:
            self._subscription = self.backend.on_auth_state_change(self._on_auth_change)
        except BackendError as e:
            logger.error("Error subscribing to auth changes: %s", e)

    def close(self):
        sub, self._subscription = self._subscription, None
        if sub is not None:
            sub.unsubscribe()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    # ---- Operations ----
    def restore_session(self):
        def on_result(identity, err):
            if err is not None:
                logger.error("Error getting session: %s", err)
                # eine zwischenzeitliche Anmeldung bleibt bestehen
                if self.state is AuthState.UNKNOWN:
                    self.state = AuthState.SIGNED_OUT
                    self._notify()
                return
            self._set_identity(identity)

        self.runner.submit(self.backend.get_session, on_result)

    def sign_up(self, email: str, password: str):
        def on_result(user, err):
            if err is not None:
                logger.error("Error signing up: %s", err)
                return
            logger.info("User signed up: %s", user)

        self.runner.submit(lambda: self.backend.sign_up(email, password), on_result)

    def login(self, email: str, password: str):
        def on_result(identity, err):
            if err is not None:
                logger.error("Error logging in: %s", err)
                return
            logger.info("User logged in: %s", identity)
            self._set_identity(identity, force_load=True)

        self.runner.submit(lambda: self.backend.sign_in_with_password(email, password), on_result)

    def logout(self):
        def on_result(_, err):
            if err is not None:
                logger.error("Error logging out: %s", err)
                return
            self._set_identity(None)
            # leeren, auch wenn schon abgemeldet
            if len(self.store):
                self.store.clear()

        self.runner.submit(self.backend.sign_out, on_result)

    # ---- Internals ----
    def _on_auth_change(self, identity: Optional[Identity]):
        # kann aus einem Worker-Thread kommen
        self.runner.post(lambda: self._set_identity(identity))

    def _set_identity(self, identity: Optional[Identity], force_load: bool = False):
        previous = self.identity
        self.identity = identity
        self.state = AuthState.SIGNED_IN if identity else AuthState.SIGNED_OUT
        if previous is not None and previous != identity:
            self.store.clear()
        if identity and (force_load or identity != previous):
            self.store.load(identity)
        self._notify()
