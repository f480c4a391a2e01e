"""Article store: parsed, annotated articles held for the process lifetime."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from reveal_core.errors import ArticleNotFound, ConfigurationMissing
from reveal_core.identity import TokenIdSequence
from reveal_core.matching import BlurTargets, apply_blur_targets, unmatched_targets
from reveal_core.models import Article, ArticleConfig, ArticleConfigFile
from reveal_core.tokenize import tokenize_article

logger = logging.getLogger(__name__)


def parse_article(config: ArticleConfig, ids: TokenIdSequence | None = None) -> Article:
    """Tokenize an article and apply its blur targets."""
    targets = BlurTargets.from_config(config.blurred_words)
    tokens, spans = apply_blur_targets(tokenize_article(config.content, ids), targets)

    missing = unmatched_targets(tokens, targets)
    if missing:
        logger.warning("Article %s: blur targets not found in content: %s", config.id, ", ".join(missing))

    return Article(
        id=config.id,
        title=config.title,
        tokens=tuple(tokens),
        price_per_reveal=config.price_per_word,
        spans=tuple(spans),
    )


class ArticleStore:
    def __init__(self, articles: list[Article]) -> None:
        self._articles = list(articles)
        self._by_id = {article.id: article for article in self._articles}

    @classmethod
    def from_config(cls, config: ArticleConfigFile) -> ArticleStore:
        ids = TokenIdSequence()
        store = cls([parse_article(entry, ids) for entry in config.articles])
        logger.info("Loaded %d article(s)", len(store))
        for index, article in enumerate(store):
            logger.info("  %d. %r - %d blurred words", index + 1, article.title, article.blurred_count)
        return store

    @classmethod
    def load(cls, path: Path) -> ArticleStore:
        """Read the JSON article configuration once; reload needs a restart."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationMissing(f"Cannot read article config {path}: {e}") from e
        try:
            config = ArticleConfigFile.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationMissing(f"Invalid article config {path}: {e}") from e
        return cls.from_config(config)

    def __iter__(self) -> Iterator[Article]:
        return iter(self._articles)

    def __len__(self) -> int:
        return len(self._articles)

    def get(self, article_id: str) -> Article:
        article = self._by_id.get(article_id)
        if article is None:
            raise ArticleNotFound(f"Unknown article: {article_id}")
        return article

    def by_index(self, index: int) -> Article:
        if index < 0 or index >= len(self._articles):
            raise ArticleNotFound()
        return self._articles[index]
