"""x402 payment gate for the reveal endpoint."""

import logging
import re
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from x402.fastapi.middleware import require_payment

from api.config import Settings
from reveal_core.store import ArticleStore

logger = logging.getLogger(__name__)

REVEAL_PATH_RE = re.compile(r"^/api/pay/reveal/(?P<index>\d+)/(?P<word_id>[^/]+)$")

Gate = Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]


def build_gates(store: ArticleStore, settings: Settings) -> dict[int, Gate]:
    """One x402 gate per article, priced at that article's per-word price."""
    return {
        index: require_payment(
            price=article.price_per_reveal,
            pay_to_address=settings.pay_to_address,
            path="*",
            description=f"Reveal a word in {article.title!r}",
            network=settings.network,
            facilitator_config={"url": settings.facilitator_url},
        )
        for index, article in enumerate(store)
    }


def gate_for(request: Request, store: ArticleStore, gates: dict[int, Gate]) -> Gate | None:
    """
    The gate guarding this request, if it must be paid for.

    Only reveals of existing blurred tokens are charged; anything else falls
    through to the route, which answers 404/400 for free.
    """
    if request.method != "POST":
        return None
    match = REVEAL_PATH_RE.match(request.url.path)
    if match is None:
        return None
    index = int(match["index"])
    if index >= len(store):
        return None
    token = store.by_index(index).get_token(match["word_id"])
    if token is None or not token.is_blurred:
        return None
    return gates.get(index)


def install_payment_gate(app: FastAPI, store: ArticleStore, settings: Settings) -> None:
    gates = build_gates(store, settings)
    blurred = sum(article.blurred_count for article in store)
    logger.info(
        "Payment gate: %d article(s), %d blurred words, paying %s on %s via %s",
        len(gates),
        blurred,
        settings.pay_to_address,
        settings.network,
        settings.facilitator_url,
    )

    @app.middleware("http")
    async def payment_gate(request: Request, call_next):
        gate = gate_for(request, store, gates)
        if gate is None:
            return await call_next(request)
        return await gate(request, call_next)
