"""
Pytest configuration and fixtures.
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from api.main import create_app
from reveal_core.ledger import RevealLedger
from reveal_core.models import ArticleConfig, ArticleConfigFile
from reveal_core.reveal import RevealService
from reveal_core.store import ArticleStore

PROJECT_ROOT = Path(__file__).parent.parent
WALLET = "0x1111111111111111111111111111111111111111"

ADAM_CONTENT = "Adam started a company. Adam worked hard."
AR_CONTENT = "Tech like augmented reality in ways. Later, augmented reality again."


def make_store(*entries: dict) -> ArticleStore:
    """Store built from inline article dicts (camelCase keys, as in the config file)."""
    return ArticleStore.from_config(
        ArticleConfigFile(articles=[ArticleConfig.model_validate(e) for e in entries])
    )


def article_entry(article_id: str, content: str, blurred: list[str], price: str = "$0.01") -> dict:
    return {
        "id": article_id,
        "title": f"Article {article_id}",
        "content": content,
        "blurredWords": blurred,
        "pricePerWord": price,
    }


@pytest.fixture
def store() -> ArticleStore:
    return make_store(
        article_entry("adam", ADAM_CONTENT, ["Adam"]),
        article_entry("ar", AR_CONTENT, ["augmented reality"]),
        article_entry("adam-again", "Adam is back.", ["Adam"]),
    )


@pytest.fixture
def service(store: ArticleStore) -> RevealService:
    return RevealService(store, RevealLedger())


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "article-config.json"
    path.write_text(
        json.dumps({"articles": [article_entry("adam", ADAM_CONTENT, ["Adam"])]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def free_settings() -> Settings:
    return Settings(require_payment=False, _env_file=None)


@pytest.fixture
def client(store: ArticleStore, free_settings: Settings):
    app = create_app(free_settings, store=store)
    with TestClient(app) as c:
        yield c
