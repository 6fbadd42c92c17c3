# lexicon_store/shared/config.py
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class StorageBackend(str, Enum):
    MONGO = "mongo"
    MEMORY = "memory"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "lexicon-store"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "lexicon-store"

    # --- Persistence ---
    STORAGE_BACKEND: StorageBackend = StorageBackend.MONGO

    # MONGO CONFIG
    MONGO_URL: str = "mongodb://127.0.0.1:27017"
    MONGO_DB_NAME: str = "lexicons"
    LEXICON_COLLECTION: str = "lexicon_buscompany"
    # Timeouts belong to the driver; the service imposes none of its own.
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 30000

    # --- Resilience ---
    STORE_CONNECT_ATTEMPTS: int = 3

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
