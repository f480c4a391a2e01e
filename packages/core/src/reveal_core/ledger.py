from __future__ import annotations

import threading
from collections.abc import Iterable


class RevealLedger:
    """
    Per-user, per-article sets of unlocked normalized words.

    Entries only grow. One lock serializes every read and write, since the
    API serves requests from a thread pool.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, str], set[str]] = {}

    def add(self, user: str, article_id: str, words: Iterable[str]) -> frozenset[str]:
        with self._lock:
            entry = self._entries.setdefault((user, article_id), set())
            entry.update(words)
            return frozenset(entry)

    def revealed(self, user: str | None, article_id: str) -> frozenset[str]:
        if user is None:
            return frozenset()
        with self._lock:
            return frozenset(self._entries.get((user, article_id), ()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
