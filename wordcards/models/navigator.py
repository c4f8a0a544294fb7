from __future__ import annotations
from typing import Optional

from wordcards.models.state import Observable, WordEntry


class CardNavigator(Observable):
    """Cursor over the word store plus the reveal flag of the current card."""

    def __init__(self, store):
        super().__init__()
        self.store = store
        self.cursor = 0
        self.revealed = False
        store.add_listener(self._on_store_changed)

    @property
    def current(self) -> Optional[WordEntry]:
        entries = self.store.entries
        if not entries:
            return None
        return entries[self.cursor]

    def next(self):
        n = len(self.store)
        if n == 0:
            return
        self.cursor = (self.cursor + 1) % n
        self.revealed = False
        self._notify()

    def toggle_reveal(self):
        if len(self.store) == 0:
            return
        self.revealed = not self.revealed
        self._notify()

    def reset(self):
        self.cursor = 0
        self.revealed = False
        self._notify()

    def _on_store_changed(self, store, change: str):
        if change in ("load", "clear"):
            self.reset()
        elif change == "delete" and self.cursor >= len(store):
            # Liste ist unter den Cursor geschrumpft
            self.reset()
