"""FastAPI dependencies for the article store, reveal service and caller identity."""

from typing import Annotated

from fastapi import Depends, Header, Request

from reveal_core.identity import user_identity_for
from reveal_core.reveal import RevealService
from reveal_core.store import ArticleStore


def get_store(request: Request) -> ArticleStore:
    return request.app.state.store


def get_service(request: Request) -> RevealService:
    return request.app.state.service


def get_user(x_wallet_address: Annotated[str | None, Header()] = None) -> str | None:
    """Lowercased wallet address from `X-Wallet-Address`; None for anonymous callers."""
    return user_identity_for(x_wallet_address)


Store = Annotated[ArticleStore, Depends(get_store)]
Service = Annotated[RevealService, Depends(get_service)]
WalletUser = Annotated[str | None, Depends(get_user)]
