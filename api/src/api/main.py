"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import Settings, get_settings
from api.payments import install_payment_gate
from api.routes import articles, reveal
from reveal_core.errors import RevealError
from reveal_core.ledger import RevealLedger
from reveal_core.reveal import RevealService
from reveal_core.store import ArticleStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Pay-per-reveal server ready: %d article(s) loaded", len(app.state.store))
    yield
    # Shutdown
    logger.info("Reveal ledger held %d user/article entries", len(app.state.service.ledger))


async def reveal_error_handler(request: Request, exc: RevealError) -> JSONResponse:
    logger.info(exc.to_log_message())
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "status": exc.status_code},
    )


def create_app(
    settings: Settings | None = None,
    store: ArticleStore | None = None,
    ledger: RevealLedger | None = None,
) -> FastAPI:
    """
    Build the application.

    The store and ledger live on `app.state` for the process lifetime and are
    handed to routes through `api.deps`. Raises ConfigurationMissing when
    payments are required but no payout address is set.
    """
    settings = settings or get_settings()
    settings.check_payout()
    store = store if store is not None else ArticleStore.load(settings.article_config_path)
    service = RevealService(store, ledger if ledger is not None else RevealLedger())

    app = FastAPI(
        title="Pay-per-reveal API",
        description="Articles with blurred words, revealed one micropayment at a time",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.service = service

    app.add_exception_handler(RevealError, reveal_error_handler)

    if settings.require_payment:
        install_payment_gate(app, store, settings)
    else:
        logger.warning("Payments disabled: reveals are free")

    # CORS middleware, outermost so 402 responses carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-PAYMENT-RESPONSE"],
    )

    # Include routers
    app.include_router(articles.router, prefix="/api", tags=["articles"])
    app.include_router(reveal.router, prefix="/api", tags=["reveal"])

    @app.get("/api/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "message": "Pay-per-reveal article server running",
            "config": {
                "network": settings.network,
                "payTo": settings.pay_to_address,
                "facilitator": settings.facilitator_url,
            },
        }

    return app
