"""
Pay-per-reveal core

Article tokenization, blur-target matching, the reveal ledger and the
per-user masking view.
"""

__version__ = "0.1.0"

from reveal_core.errors import (
    ArticleNotFound,
    ConfigurationMissing,
    ErrorType,
    RevealError,
    TokenNotBlurred,
    TokenNotFound,
)
from reveal_core.ledger import RevealLedger
from reveal_core.models import Article, ArticleConfig, ArticleConfigFile, PhraseSpan, RevealResult, Token, ViewToken
from reveal_core.normalize import normalize_word
from reveal_core.reveal import BLUR_PLACEHOLDER, RevealService
from reveal_core.store import ArticleStore, parse_article
from reveal_core.tokenize import tokenize_article

__all__ = [
    "Article",
    "ArticleConfig",
    "ArticleConfigFile",
    "ArticleNotFound",
    "ArticleStore",
    "BLUR_PLACEHOLDER",
    "ConfigurationMissing",
    "ErrorType",
    "PhraseSpan",
    "RevealError",
    "RevealLedger",
    "RevealResult",
    "RevealService",
    "Token",
    "TokenNotBlurred",
    "TokenNotFound",
    "ViewToken",
    "normalize_word",
    "parse_article",
    "tokenize_article",
]
