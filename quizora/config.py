"""
Application configuration from environment variables.
Loads .env from the project directory so keys are found regardless of cwd.
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env next to the project root (parent of quizora/); loaded explicitly so keys are set even when run elsewhere
_PROJECT_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database: sqlite for local runs and tests, postgresql for production
    database_url: str = "sqlite:///./quizora_dev.db"

    # Environment: set ENV=production in production; hides stack traces and enforces SECRET_KEY.
    env: str = "development"

    # JWT. In production (ENV=production), SECRET_KEY must be set.
    secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30

    # Stripe Checkout. Amount is a placeholder price for every quiz.
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    checkout_amount_cents: int = 1000
    checkout_currency: str = "usd"
    checkout_product_name: str = "Quiz access"
    # Frontend base URL for checkout success/cancel redirects
    client_url: str = "http://localhost:3000"

    # Chat helper (Gemini). Missing key means every chat request fails with 500.
    gemini_api_key: str = ""
    chat_model_name: str = "gemini-2.5-flash"
    chat_temperature: float = 0.1
    chat_history_turns: int = 5

    # CORS: comma-separated origins
    cors_origins: str = "http://localhost:3000"

    port: int = 8000

    @field_validator("checkout_currency", mode="before")
    @classmethod
    def _lower_currency(cls, v: str) -> str:
        return (v or "usd").strip().lower()

    @field_validator("client_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    @property
    def is_production(self) -> bool:
        return (self.env or "").strip().lower() == "production"


settings = Settings()
