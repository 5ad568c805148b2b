"""Configuration for the backend using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from loguru import logger
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _PACKAGE_DIR.parent.parent  # src/bodegoes_assistant/ → project root

DEFAULT_PLACE_ID = "ChIJN1t_tDeuEmsRUsoyG83frY4"


class Settings(BaseSettings):
    """All application settings, loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # OpenAI — chat completion
    # ------------------------------------------------------------------
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_chat_model: str = "gpt-4o"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500

    # ------------------------------------------------------------------
    # Google Places — restaurant info panel
    # ------------------------------------------------------------------
    google_places_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("google_places_api_key", "google_api_key"),
    )
    restaurant_place_id: str = Field(
        default=DEFAULT_PLACE_ID,
        validation_alias=AliasChoices("restaurant_place_id", "bodegoes_place_id"),
    )
    places_timeout_seconds: float = 10.0

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------
    chat_db_path: Path = _PROJECT_ROOT / "database" / "bodegoes_chat.sqlite"

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    cors_origins: list[str] = ["*"]

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False

    # ------------------------------------------------------------------
    # Observability — "off" | "logfire" | "otel"
    # ------------------------------------------------------------------
    observability: str = "off"
    otel_service_name: str = "bodegoes-assistant"
    otel_exporter_otlp_endpoint: str = "http://localhost:4318"
    otel_console_exporter: bool = False

    # ------------------------------------------------------------------
    # Streamlit UI
    # ------------------------------------------------------------------
    api_base_url: str = "http://localhost:8000"

    def validate_runtime(self) -> None:
        """Check that required values are present.

        Call this at application startup (not at import time) so that
        tests can override settings before validation runs.
        """
        if not self.openai_api_key:
            raise ValueError("OPENAI_API_KEY not set. Add it to .env")
        if not self.google_places_api_key:
            logger.warning(
                "GOOGLE_PLACES_API_KEY not set; restaurant info will use fallback data"
            )


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings singleton."""
    return Settings()
