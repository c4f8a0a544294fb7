from __future__ import annotations
import logging
from typing import Callable, Optional

from wordcards.models.state import Identity, Observable, WordEntry

logger = logging.getLogger(__name__)


class WordListStore(Observable):
    """The signed-in user's word list, changed only after the backend confirms.

    Listeners are called as ``fn(store, change)`` with change one of
    ``"load"``, ``"add"``, ``"delete"``, ``"clear"``.
    """

    def __init__(self, backend, runner):
        super().__init__()
        self.backend = backend
        self.runner = runner
        self._entries: list[WordEntry] = []
        # erhöht bei clear(); ältere Antworten werden verworfen
        self._generation = 0

    @property
    def entries(self) -> tuple[WordEntry, ...]:
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)

    # ---- Backend-bestätigte Operationen ----
    def load(self, identity: Identity):
        gen = self._generation

        def on_result(rows, err):
            if err is not None:
                logger.error("Error fetching words: %s", err)
                return
            if gen != self._generation:
                logger.debug("Dropping stale word list for %s", identity)
                return
            self._entries = [e for e in rows if e.owner == identity]
            self._notify("load")

        self.runner.submit(lambda: self.backend.fetch_words(identity), on_result)

    def add(self, word: str, meaning: str, identity: Optional[Identity],
            on_added: Optional[Callable[[list[WordEntry]], None]] = None) -> bool:
        if not word or not meaning or not identity:
            return False
        gen = self._generation

        def on_result(created, err):
            if err is not None:
                logger.error("Error adding word: %s", err)
                return
            if gen != self._generation:
                logger.debug("Dropping added word for signed-out user %s", identity)
                return
            self._entries.extend(created)
            self._notify("add")
            if on_added is not None:
                on_added(list(created))

        self.runner.submit(lambda: self.backend.insert_word(word, meaning, identity), on_result)
        return True

    def delete(self, index: int) -> bool:
        if not 0 <= index < len(self._entries):
            logger.warning("Delete ignored, index %s out of range (0..%s)", index, len(self._entries) - 1)
            return False
        target = self._entries[index]
        gen = self._generation

        def on_result(_, err):
            if err is not None:
                logger.error("Error deleting word: %s", err)
                return
            if gen != self._generation:
                return
            for i, e in enumerate(self._entries):
                if e.id == target.id:
                    del self._entries[i]
                    self._notify("delete")
                    return

        self.runner.submit(lambda: self.backend.delete_word(target.id), on_result)
        return True

    def clear(self):
        self._generation += 1
        self._entries = []
        self._notify("clear")
