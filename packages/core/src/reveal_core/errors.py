"""
Error taxonomy for article loading and word reveals.

Each error carries a machine-readable type and the HTTP status the API
answers with. Payment denial is not represented: the payment middleware
owns it and answers 402 before a reveal is reached.
"""

from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """Machine-interpretable error types."""

    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    """Required configuration is absent or invalid; fatal at startup."""

    ARTICLE_NOT_FOUND = "ARTICLE_NOT_FOUND"
    """The caller referenced an unknown article."""

    TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
    """The caller referenced a token id that is not in the article."""

    TOKEN_NOT_BLURRED = "TOKEN_NOT_BLURRED"
    """A reveal was attempted on a token that is not payment-gated."""


class RevealError(Exception):
    error_type: ErrorType
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_log_message(self) -> str:
        return f"[{self.error_type.value}] {self.message}"


class ConfigurationMissing(RevealError):
    error_type = ErrorType.CONFIGURATION_MISSING
    status_code = 500


class ArticleNotFound(RevealError):
    error_type = ErrorType.ARTICLE_NOT_FOUND
    status_code = 404

    def __init__(self, message: str = "Invalid article index") -> None:
        super().__init__(message)


class TokenNotFound(RevealError):
    error_type = ErrorType.TOKEN_NOT_FOUND
    status_code = 404

    def __init__(self, message: str = "Word not found") -> None:
        super().__init__(message)


class TokenNotBlurred(RevealError):
    error_type = ErrorType.TOKEN_NOT_BLURRED
    status_code = 400

    def __init__(self, message: str = "This word is not blurred") -> None:
        super().__init__(message)
