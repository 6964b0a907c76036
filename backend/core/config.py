"""
Configuration management for the FastAPI application.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RephraseProvider = Literal["auto", "huggingface", "gemini", "rules"]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore", populate_by_name=True)

    # API settings
    api_title: str = "Content Guard API"
    api_description: str = """
    Companion backend for the Content Guard browser extension.

    The extension scans page text for offensive language and negative sentiment,
    optionally rephrases flagged passages, and records results for later review.

    ## Features
    - Lexicon-based sentiment scoring
    - Offensive-content classification with configurable sensitivity
    - Rephrasing through a remote text-generation model with a rule-based fallback
    - Batch page scans with bounded concurrency
    - Storage of flagged-and-rephrased results
    """
    api_version: str = "0.1.0"
    api_prefix: str = "/api"

    # Server settings
    host: str = "0.0.0.0"
    port: int = Field(default=8000, validation_alias="PORT")
    debug: bool = True

    # Logging settings
    log_level: str = "INFO"
    log_file_path: Optional[str] = None  # JSON file logs are written only when set

    # Rephrasing settings
    # "auto" uses HuggingFace when its key is set, then Gemini, else rules only
    rephrase_provider: RephraseProvider = "auto"
    huggingface_api_key: str = ""
    huggingface_model_url: str = "https://api-inference.huggingface.co/models/facebook/bart-large-cnn"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash-lite"
    rephrase_timeout_seconds: float = Field(default=15.0, gt=0.0)
    rephrase_max_concurrency: int = Field(default=1, ge=1)
    rephrase_retry_max_attempts: int = Field(default=1, ge=1)  # 1 = no retry before fallback
    rephrase_retry_backoff_base: float = 0.5
    rephrase_rate_limit_per_minute: int = 120

    # Scanning settings
    sentiment_min_length: int = Field(default=10, ge=0)
    scan_max_concurrency: int = Field(default=1, ge=1)
    scan_max_units: int = Field(default=500, ge=1)

    # Database settings - a full URL wins over the individual components
    database_url_override: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    db_name: str = "content_guard"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432

    # Database connection settings
    database_echo: bool = False
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_timeout: float = 30.0
    database_pool_recycle: int = 3600
    database_connect_timeout: float = 10.0

    # Keep only the newest N analysis results (0 disables pruning)
    analysis_results_max_kept: int = Field(default=20, ge=0)

    @property
    def database_url(self) -> str:
        """Async database URL, built from individual components unless DATABASE_URL is set."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"


# Global settings instance
settings = Settings()
