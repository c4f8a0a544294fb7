from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from wordcards.models.errors import ValidationError

Identity = str


class AuthState(Enum):
    UNKNOWN = "unknown"
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


@dataclass(frozen=True, slots=True)
class WordEntry:
    id: Any
    word: str
    meaning: str
    owner: Identity

    def __post_init__(self):
        if not self.word:
            raise ValidationError("word must not be empty")
        if not self.meaning:
            raise ValidationError("meaning must not be empty")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WordEntry":
        # Zeilen der Tabelle "words": id, word, meaning, user_id
        return cls(
            id=row.get("id"),
            word=str(row.get("word") or ""),
            meaning=str(row.get("meaning") or ""),
            owner=str(row.get("user_id") or ""),
        )


class Observable:
    """Minimal listener registry shared by the session, store and navigator."""

    def __init__(self):
        self._listeners: list[Callable[..., None]] = []

    def add_listener(self, fn: Callable[..., None]):
        if fn not in self._listeners:
            self._listeners.append(fn)

    def remove_listener(self, fn: Callable[..., None]):
        try:
            self._listeners.remove(fn)
        except ValueError:
            pass

    def _notify(self, *args):
        for fn in list(self._listeners):
            fn(self, *args)


@dataclass(slots=True)
class ViewState:
    # UI-Zustand (nicht persistiert)
    show_landing: bool = True
    email: str = ""
    password: str = ""
    new_word: str = ""
    new_meaning: str = ""
    status: Optional[str] = None

    def screen(self, identity: Optional[Identity]) -> str:
        if self.show_landing:
            return "landing"
        return "cards" if identity else "auth"

    def clear_new_word(self):
        self.new_word = ""
        self.new_meaning = ""
