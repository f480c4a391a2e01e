from __future__ import annotations

import unicodedata


def _is_punctuation(ch: str) -> bool:
    # Unicode general category P* covers ASCII .,!?;:'"()- as well as the
    # CJK symbols block (U+3000-U+303F) and full-width forms like U+FF0C.
    return unicodedata.category(ch).startswith("P")


def normalize_word(text: str) -> str:
    """
    Canonical matching form of a word or phrase.

    - NFKC (full-width letters fold to their ASCII forms)
    - case-folded
    - punctuation removed
    - surrounding whitespace trimmed
    """
    folded = unicodedata.normalize("NFKC", text).casefold()
    return "".join(ch for ch in folded if not _is_punctuation(ch)).strip()


def split_words(text: str) -> list[str]:
    return text.split()


def normalize_phrase(text: str) -> list[str]:
    """Normalized word sequence of a blur target; empty for pure punctuation."""
    return [w for w in (normalize_word(part) for part in split_words(text)) if w]
