"""Configuration models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("dailyfeed", description="Database name")
    user: str = Field("dailyfeed_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class FeedConfig(BaseModel):
    """Remote feed and sync policy configuration."""

    base_url: str = Field(
        "https://db.rebase.network/api/v1/geekdailies",
        description="Paginated feed endpoint",
    )
    page_size: int = Field(100, description="Items requested per page", ge=1, le=1000)
    max_retries: int = Field(3, description="Retries after server errors per sync", ge=0, le=10)
    retry_delay: float = Field(5.0, description="Seconds to wait before a retry", ge=0.0)
    timeout: float = Field(30.0, description="HTTP timeout in seconds", gt=0.0)
    min_cached_items: int = Field(
        100,
        description="A same-day cache with fewer items is discarded and refreshed",
        ge=0,
    )
    user_agent: str = Field("dailyfeed/0.1 (daily news sync)", description="HTTP User-Agent")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Only http(s) endpoints are supported."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v


class StoreConfig(BaseModel):
    """Local cache storage configuration."""

    backend: Literal["file", "postgres", "memory"] = Field("file", description="Storage backend")
    path: str = Field("~/.cache/dailyfeed", description="Cache directory for the file backend")
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)


class ConfigModel(BaseModel):
    """Main configuration model."""

    feed: FeedConfig = Field(default_factory=FeedConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
