"""Paid reveal endpoint; the payment gate in `api.payments` runs before it."""

from fastapi import APIRouter

from api.deps import Service, Store, WalletUser
from api.routes.articles import CamelModel

router = APIRouter()


class RevealResponse(CamelModel):
    success: bool
    word_id: str
    text: str
    message: str


@router.post("/pay/reveal/{index}/{word_id}", response_model=RevealResponse)
def reveal_word(index: int, word_id: str, store: Store, service: Service, user: WalletUser) -> RevealResponse:
    """Reveal a blurred word (or its whole phrase) for the caller."""
    article = store.by_index(index)
    result = service.reveal_word(article.id, word_id, user)
    return RevealResponse(success=True, word_id=result.word_id, text=result.text, message=result.message)
