from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from reveal_core.normalize import normalize_word


class TokenKind(str, Enum):
    WORD = "word"
    PARAGRAPH_BREAK = "paragraph-break"
    LINE_BREAK = "line-break"


class BlockType(str, Enum):
    TEXT = "text"
    HEADING = "heading"
    LIST_ITEM = "list-item"


@dataclass(frozen=True)
class Token:
    id: str
    text: str
    kind: TokenKind = TokenKind.WORD
    block: BlockType | None = None
    heading_level: int | None = None
    is_blurred: bool = False
    phrase_group_id: str | None = None

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD

    @property
    def normalized(self) -> str:
        return normalize_word(self.text)

    @property
    def type_label(self) -> str:
        # Renderers expect the block type for words and the marker kind otherwise.
        if self.is_word and self.block is not None:
            return self.block.value
        return self.kind.value


@dataclass(frozen=True)
class PhraseSpan:
    """One occurrence of a multi-word blur target; `start`/`end` are inclusive token indexes."""

    group_id: str
    phrase: str
    start: int
    end: int

    def __contains__(self, index: int) -> bool:
        return self.start <= index <= self.end


@dataclass(frozen=True)
class Article:
    id: str
    title: str
    tokens: tuple[Token, ...]
    price_per_reveal: str
    spans: tuple[PhraseSpan, ...] = ()

    @cached_property
    def _index_by_id(self) -> dict[str, int]:
        return {token.id: i for i, token in enumerate(self.tokens)}

    def index_of(self, token_id: str) -> int | None:
        return self._index_by_id.get(token_id)

    def get_token(self, token_id: str) -> Token | None:
        index = self.index_of(token_id)
        return None if index is None else self.tokens[index]

    def span_at(self, index: int) -> PhraseSpan | None:
        group_id = self.tokens[index].phrase_group_id
        if group_id is None:
            return None
        for span in self.spans:
            if span.group_id == group_id and index in span:
                return span
        return None

    @property
    def blurred_count(self) -> int:
        return sum(1 for token in self.tokens if token.is_blurred)


@dataclass(frozen=True)
class ViewToken:
    """A token as one user sees it."""

    id: str
    text: str
    is_blurred: bool
    is_revealed: bool
    type: str
    level: int | None = None
    phrase_id: str | None = None


@dataclass(frozen=True)
class RevealResult:
    word_id: str
    text: str
    revealed_words: frozenset[str]
    instance_count: int
    unlocked_count: int

    @property
    def message(self) -> str:
        if self.unlocked_count > 1:
            return f'Word revealed: "{self.text}" ({self.unlocked_count} instances unlocked)'
        return f'Word revealed: "{self.text}"'


class ArticleConfig(BaseModel):
    """One article entry of the article configuration file."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    content: str
    blurred_words: list[str] = Field(default_factory=list)
    price_per_word: str = "$0.01"


class ArticleConfigFile(BaseModel):
    articles: list[ArticleConfig]
