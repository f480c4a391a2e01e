"""Article endpoints (free)."""

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.deps import Service, Store, WalletUser

router = APIRouter()


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArticleSummary(CamelModel):
    """Article metadata for list views."""

    index: int
    id: str
    title: str
    price_per_word: str
    total_words: int
    blurred_words: int


class ArticleListResponse(CamelModel):
    articles: list[ArticleSummary]


class ViewTokenInfo(CamelModel):
    """A token as the caller sees it: placeholder text until revealed."""

    id: str
    text: str
    is_blurred: bool
    is_revealed: bool
    type: str
    level: int | None = None
    phrase_id: str | None = None


class ArticleResponse(CamelModel):
    """Masked article for one caller."""

    index: int
    id: str
    title: str
    content: list[ViewTokenInfo]
    price_per_word: str


@router.get("/articles", response_model=ArticleListResponse)
def list_articles(store: Store) -> ArticleListResponse:
    """List all articles (metadata only)."""
    return ArticleListResponse(
        articles=[
            ArticleSummary(
                index=index,
                id=article.id,
                title=article.title,
                price_per_word=article.price_per_reveal,
                total_words=len(article.tokens),
                blurred_words=article.blurred_count,
            )
            for index, article in enumerate(store)
        ]
    )


@router.get("/article/{index}", response_model=ArticleResponse, response_model_exclude_none=True)
def get_article(index: int, store: Store, service: Service, user: WalletUser) -> ArticleResponse:
    """Get an article with unrevealed blurred words replaced by a placeholder."""
    article = store.by_index(index)
    content = service.render_masked(article.id, user)
    return ArticleResponse(
        index=index,
        id=article.id,
        title=article.title,
        content=[
            ViewTokenInfo(
                id=token.id,
                text=token.text,
                is_blurred=token.is_blurred,
                is_revealed=token.is_revealed,
                type=token.type,
                level=token.level,
                phrase_id=token.phrase_id,
            )
            for token in content
        ],
        price_per_word=article.price_per_reveal,
    )
