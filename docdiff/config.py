"""Application configuration and logging setup."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    app_name: str = "Document Comparison Explorer"
    debug: bool = False
    log_level: str = "INFO"

    # Data provider
    api_base_url: str = "https://docdiff.mooo.com"
    request_timeout: float = 30.0
    request_retries: int = 1
    pair_lookup_size: int = 1000

    # Fuzzy search tolerance (0.0 exact, 1.0 anything)
    search_threshold: float = 0.2

    # Regulations view: provision id suffixes and route tokens per side
    suffix_a: str = "_NSW"
    suffix_b: str = "_Victoria"
    jurisdiction_a: str = "nsw"
    jurisdiction_b: str = "vic"
    label_a: str = "NSW WHS Regulation"
    label_b: str = "Victoria WHS Regulation"

    # Climate view: document tokens sent to the paragraph endpoints
    climate_document_a: str = "ncr"
    climate_document_b: str = "singapore"
    climate_label_a: str = "UAE Report"
    climate_label_b: str = "Singapore Report"

    # Fixture provider
    data_dir: str = "data"

    model_config = SettingsConfigDict(
        env_prefix="DOCDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
