"""API configuration from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

from reveal_core.errors import ConfigurationMissing

DEFAULT_CORS_ORIGINS = ",".join(
    [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
)


class Settings(BaseSettings):
    """API settings loaded from environment."""

    pay_to_address: str | None = None
    network: str = "base-sepolia"
    facilitator_url: str = "https://x402.org/facilitator"
    require_payment: bool = True

    article_config_path: Path = Path("articles/article-config.json")

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: str = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def check_payout(self) -> None:
        """Payments cannot be taken without somewhere to send them."""
        if self.require_payment and not (self.pay_to_address or "").strip():
            raise ConfigurationMissing("Set API_PAY_TO_ADDRESS to your wallet address (or API_REQUIRE_PAYMENT=false)")

    model_config = {"env_prefix": "API_", "env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    return Settings()
