"""Application settings with environment variable support."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_MODELS = (
    "anthropic:claude-sonnet-4-20250514",
    "anthropic:claude-3-opus-20240229",
    "openai:gpt-4o-mini",
    "openai:gpt-4o",
    "mock",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8080, description="API port")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Emit JSON log lines instead of console output")

    # LLM Settings
    llm_mode: Literal["live", "mock"] = Field(default="live", description="LLM mode: live or mock")
    chat_model: str = Field(
        default="anthropic:claude-sonnet-4-20250514",
        description="Model used for classification, synthesis and chat (provider:model)",
    )
    chat_model_max_tokens: int = Field(default=1024, description="Max tokens for free-form replies")
    assistant_model_max_tokens: int = Field(default=2048, description="Max tokens for chat assistant replies")
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API key")
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_base_url: Optional[str] = Field(
        default=None, description="OpenAI API base URL (for OpenRouter or any OpenAI-compatible API)"
    )

    # Search Settings
    web_search_provider: Literal["serper", "rapidapi", "serpapi", "mock"] = Field(
        default="serper", description="Web search provider"
    )
    image_search_provider: Literal["serper", "serpapi", "pexels", "rapidapi", "mock"] = Field(
        default="serper", description="Image search provider"
    )
    serper_api_key: Optional[str] = Field(default=None, description="Serper API key")
    rapidapi_key: Optional[str] = Field(default=None, description="RapidAPI key (Google web search)")
    serpapi_api_key: Optional[str] = Field(default=None, description="SerpAPI key")
    pexels_api_key: Optional[str] = Field(default=None, description="Pexels API key")
    https_proxy: Optional[str] = Field(default=None, description="Proxy URL for outbound provider calls")

    search_timeout: float = Field(default=10.0, gt=0, description="Per-call provider timeout in seconds")
    search_retries: int = Field(default=3, ge=1, description="Attempts per provider call")
    search_backoff_base: float = Field(default=3.0, ge=0, description="Initial retry delay in seconds")
    search_backoff_max: float = Field(default=30.0, ge=0, description="Maximum retry delay in seconds")
    search_fanout_timeout: float = Field(
        default=45.0, gt=0, description="Shared timeout for the concurrent web + image search"
    )
    search_max_results: int = Field(default=10, ge=1, description="Results requested per provider call")

    # Web Scraper Settings
    scraper_timeout: int = Field(default=10, description="Page fetch timeout in seconds")
    scraper_max_chars: int = Field(default=8000, description="Max characters of page text kept")

    # Rate limiting
    rate_limit_requests: int = Field(default=100, ge=1, description="Requests per window per client")
    rate_limit_window_seconds: int = Field(default=15 * 60, ge=1, description="Rate limit window")

    @field_validator("chat_model")
    @classmethod
    def validate_chat_model(cls, value: str) -> str:
        """Reject models outside the supported allow-list."""
        if value not in SUPPORTED_MODELS:
            raise ValueError(
                f"Invalid model. Supported models are: {', '.join(SUPPORTED_MODELS)}"
            )
        return value

    @property
    def search_retry_budget(self) -> float:
        """Worst-case seconds one provider call can spend across all retries."""
        backoff = sum(
            min(self.search_backoff_base * (2**attempt), self.search_backoff_max)
            for attempt in range(self.search_retries - 1)
        )
        return self.search_retries * self.search_timeout + backoff

    @model_validator(mode="after")
    def validate_search_budget(self) -> "Settings":
        """The fan-out timeout must leave room for every per-call retry."""
        if self.search_fanout_timeout < self.search_retry_budget:
            raise ValueError(
                f"search_fanout_timeout ({self.search_fanout_timeout:g}s) must be at least "
                f"search_retries * search_timeout + backoff ({self.search_retry_budget:g}s)"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
