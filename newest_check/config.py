from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Run configuration loaded from environment variables and .env files."""

    # pydantic-settings v2 configuration; frozen so one run sees one config
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(default="Newest Listing Order Check")
    debug: bool = Field(default=False)

    # Target listing
    listing_url: str = Field(default="https://news.ycombinator.com/newest")
    target_count: int = Field(default=100, ge=1)
    max_page_hops: int = Field(default=10, ge=0)

    # Browser
    headless: bool = Field(default=True)  # HEADLESS=false shows the browser
    timeout_ms: int = Field(default=30_000, ge=1)

    # "More" link retry policy
    more_retry_attempts: int = Field(default=2, ge=1)
    more_retry_interval_ms: int = Field(default=500, ge=0)

    # Listing markup
    row_selector: str = Field(default="tr.athing")
    title_selector: str = Field(default=".titleline a")
    age_selectors: List[str] = Field(default_factory=lambda: [".age a", ".age"])
    more_selector: str = Field(default="a.morelink")

    # Artifacts
    artifacts_dir: str = Field(default="artifacts")
    screenshots_dir: str = Field(default="screenshots")
    write_csv: bool = Field(default=False)
    write_junit: bool = Field(default=False)
    record_trace: bool = Field(default=False)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
