"""Configuration settings for LMS Core."""

import os
from typing import Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from functools import lru_cache
import logging

load_dotenv()

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# OBJECT STORAGE CONFIGURATION
# ----------------------------------------------------------------------

class StorageConfig(BaseModel):
    """
    Object storage configuration for submission uploads (local dev or S3).
    """

    # environment mode: "local" writes to the filesystem, anything else uses S3
    env: str = os.getenv("LMS_ENV", "local")

    # AWS credentials (optional for local)
    aws_access_key: str | None = os.getenv("AWS_ACCESS_KEY_ID")
    aws_secret_key: str | None = os.getenv("AWS_SECRET_ACCESS_KEY")
    aws_session_token: str | None = os.getenv("AWS_SESSION_TOKEN")

    region: str = os.getenv("AWS_REGION", "us-east-1")

    submissions_bucket: str = os.getenv("STORAGE_SUBMISSIONS_BUCKET", "lms-submissions")
    key_prefix: str = os.getenv("STORAGE_KEY_PREFIX", "submissions")

    # Local filesystem emulation root
    local_root: str = os.getenv("STORAGE_LOCAL_ROOT", "./local_storage")


# ----------------------------------------------------------------------
# DATA STORE CONFIGURATION
# ----------------------------------------------------------------------

class DataStoreConfig(BaseSettings):
    """Structured data store configuration."""
    model_config = {"env_prefix": "DATASTORE_"}

    backend: str = os.getenv("DATASTORE_BACKEND", "local")
    region: str = os.getenv("AWS_REGION", "us-east-1")
    table_prefix: str = os.getenv("DATASTORE_TABLE_PREFIX", "lms_")

    # When set, the local backend mirrors each collection to <dir>/<collection>.json
    local_dir: Optional[str] = os.getenv("DATASTORE_LOCAL_DIR")


# ----------------------------------------------------------------------
# AI CONFIGURATION
# ----------------------------------------------------------------------

class AIConfig(BaseSettings):
    """Generative AI configuration (hints and tutor chat)."""
    model_config = {"env_prefix": "AI_"}

    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    hint_temperature: float = float(os.getenv("AI_HINT_TEMPERATURE", "0.9"))
    tutor_temperature: float = float(os.getenv("AI_TUTOR_TEMPERATURE", "0.7"))
    max_tokens: int = int(os.getenv("AI_MAX_TOKENS", "600"))


# ----------------------------------------------------------------------
# LOGGING CONFIGURATION
# ----------------------------------------------------------------------

class LoggingConfig(BaseSettings):
    """Logging configuration."""
    model_config = {"env_prefix": "LOG_"}

    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = os.getenv("LOG_FORMAT", "%(asctime)s [%(levelname)s] %(name)s: %(message)s")


# ----------------------------------------------------------------------
# APP SETTINGS
# ----------------------------------------------------------------------

class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    storage: StorageConfig = Field(default_factory=StorageConfig)
    datastore: DataStoreConfig = Field(default_factory=DataStoreConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# ----------------------------------------------------------------------
# Lazy accessors (cached singletons)
# ----------------------------------------------------------------------

@lru_cache()
def get_config() -> Settings:
    """Return global app configuration."""
    return Settings()


@lru_cache()
def get_storage_config() -> StorageConfig:
    """Return object storage configuration."""
    return get_config().storage


@lru_cache()
def get_datastore_config() -> DataStoreConfig:
    """Return data store configuration."""
    return get_config().datastore


@lru_cache()
def get_ai_config() -> AIConfig:
    """Return AI configuration."""
    return get_config().ai


@lru_cache()
def get_logging_config() -> LoggingConfig:
    """Return logging configuration."""
    return get_config().logging
