from __future__ import annotations

import logging

from reveal_core.errors import TokenNotBlurred, TokenNotFound
from reveal_core.ledger import RevealLedger
from reveal_core.models import Article, RevealResult, Token, ViewToken
from reveal_core.store import ArticleStore

logger = logging.getLogger(__name__)

BLUR_PLACEHOLDER = "█████"


def mask_tokens(
    article: Article,
    revealed: frozenset[str],
    placeholder: str = BLUR_PLACEHOLDER,
) -> list[ViewToken]:
    """Project an article for a user whose ledger holds `revealed`."""
    view: list[ViewToken] = []
    for token in article.tokens:
        is_revealed = token.is_blurred and token.normalized in revealed
        hidden = token.is_blurred and not is_revealed
        view.append(
            ViewToken(
                id=token.id,
                text=placeholder if hidden else token.text,
                is_blurred=token.is_blurred,
                is_revealed=is_revealed,
                type=token.type_label,
                level=token.heading_level,
                phrase_id=token.phrase_group_id,
            )
        )
    return view


def words_unlocked_by(article: Article, token: Token) -> frozenset[str]:
    """A phrase token unlocks its whole group; any other token unlocks its own text."""
    if token.phrase_group_id is None:
        return frozenset({token.normalized})
    return frozenset(t.normalized for t in article.tokens if t.phrase_group_id == token.phrase_group_id)


def revealed_text(article: Article, index: int) -> str:
    """Surface text of the phrase occurrence containing `index`, or of the token alone."""
    token = article.tokens[index]
    span = article.span_at(index)
    if span is None:
        return token.text
    words = article.tokens[span.start : span.end + 1]
    return " ".join(t.text for t in words if t.phrase_group_id == token.phrase_group_id)


def count_blurred_matching(article: Article, words: frozenset[str]) -> int:
    return sum(1 for t in article.tokens if t.is_blurred and t.normalized in words)


class RevealService:
    """Reveal and masking operations over an article store and a ledger."""

    def __init__(
        self,
        store: ArticleStore,
        ledger: RevealLedger,
        placeholder: str = BLUR_PLACEHOLDER,
    ) -> None:
        self.store = store
        self.ledger = ledger
        self.placeholder = placeholder

    def reveal_word(self, article_id: str, token_id: str, user: str | None) -> RevealResult:
        """
        Unlock a blurred token (and its phrase group) for `user`.

        Anonymous callers get the text back but nothing is recorded.
        """
        article = self.store.get(article_id)
        index = article.index_of(token_id)
        if index is None:
            raise TokenNotFound()
        token = article.tokens[index]
        if not token.is_blurred:
            raise TokenNotBlurred()

        words = words_unlocked_by(article, token)
        if user is not None:
            ledger_words = self.ledger.add(user, article.id, words)
        else:
            ledger_words = words

        result = RevealResult(
            word_id=token.id,
            text=revealed_text(article, index),
            revealed_words=words,
            instance_count=count_blurred_matching(article, words),
            unlocked_count=count_blurred_matching(article, ledger_words),
        )
        logger.info(
            "Revealed %s in %s for %s (%d instances, %d unlocked)",
            token.id,
            article.id,
            user or "anonymous",
            result.instance_count,
            result.unlocked_count,
        )
        return result

    def render_masked(self, article_id: str, user: str | None) -> list[ViewToken]:
        article = self.store.get(article_id)
        return mask_tokens(article, self.ledger.revealed(user, article.id), self.placeholder)
