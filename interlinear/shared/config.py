# interlinear/shared/config.py
from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "interlinear"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "interlinear-engine"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Static Resources ---
    # 'http' fetches from RESOURCE_BASE_URL, 'filesystem' reads from RESOURCE_DIR
    RESOURCE_BACKEND: str = "http"
    RESOURCE_BASE_URL: str = "http://localhost:8080/"
    RESOURCE_DIR: str = "public"
    RESOURCE_TIMEOUT_SEC: float = 30.0

    LEXICON_PATH: str = "bible/strongs-lexicon.json"
    DICTIONARY_PATH: str = "bible/strongs-dictionary-pt.json"
    TAGGED_BOOK_PATH_TEMPLATE: str = "bible/kjv/{code}.json"
    TAGGED_TEXT_LANGUAGE: str = "en"

    # --- Strong's Numbers ---
    # Minimum width of the zero-padded key form. Longer numbers are never truncated.
    STRONGS_PAD_WIDTH: int = 4
    # Leading dictionary fragments that make up the definition; the rest is usage.
    DICTIONARY_DEFINITION_FRAGMENTS: int = 3

    # --- Translation ---
    # 'http' posts to TRANSLATION_URL, 'gemini' calls Google AI directly
    TRANSLATION_BACKEND: str = "http"
    TRANSLATION_URL: str = "http://localhost:54321/functions/v1/translate-strongs"
    TRANSLATION_API_KEY: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None
    AI_MODEL_NAME: str = "gemini-1.5-flash"
    TRANSLATION_TIMEOUT_SEC: float = 20.0
    TRANSLATION_FAILURE_THRESHOLD: int = 5
    TRANSLATION_RECOVERY_SEC: int = 30

    # --- Batch Translation ---
    TRANSLATION_BATCH_SIZE: int = 50
    TRANSLATION_CHUNK_SIZE: int = 10
    TRANSLATION_CHUNK_DELAY_SEC: float = 1.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
