from __future__ import annotations

import itertools
from collections.abc import Iterator

TOKEN_ID_PREFIX = "w"
PHRASE_ID_PREFIX = "phrase-"


class TokenIdSequence:
    """Hands out `w1`, `w2`, ... ; share one instance to keep ids unique across articles."""

    def __init__(self, start: int = 1) -> None:
        self._counter: Iterator[int] = itertools.count(start)

    def next_id(self) -> str:
        return f"{TOKEN_ID_PREFIX}{next(self._counter)}"


def phrase_group_id_for(normalized_words: list[str]) -> str:
    return PHRASE_ID_PREFIX + "-".join(normalized_words)


def user_identity_for(wallet_address: str | None) -> str | None:
    """Ledger key for a caller-supplied wallet address; None means anonymous."""
    if wallet_address is None:
        return None
    address = wallet_address.strip().lower()
    return address or None
