"""Application settings using Pydantic BaseSettings for environment variable management."""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        llm_provider: Completion service used for every model call (openai or gemini)
        openai_api_key: OpenAI API key (required when llm_provider=openai)
        openai_model: OpenAI chat model identifier
        gemini_api_key: Google Gemini API key (required when llm_provider=gemini)
        gemini_model: Gemini model identifier
        search_provider: Web search provider (serper, bing or serpapi)
        serper_api_key: Serper.dev API key
        bing_api_key: Bing Web Search subscription key
        serpapi_api_key: SerpAPI key
        search_country: Country hint passed to search providers
        search_language: Language/market hint passed to search providers
        llm_timeout: Seconds allowed for a single completion call
        search_timeout: Seconds allowed for a single search call
        request_timeout: Seconds allowed for a whole classification request
        max_claims: Default number of claims extracted per page
        max_results: Default search results budget per claim
        claim_text_limit: Characters of page text sent to claim extraction
        page_text_limit: Characters of page text accepted per request
        extra_trusted_domains: Domains added to the built-in trust registry
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
    """

    llm_provider: Literal["openai", "gemini"] = Field(
        default="openai",
        description="Completion service for claim extraction, stance and base classification"
    )
    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI chat model identifier"
    )
    gemini_api_key: str = Field(default="", description="Google Gemini API key")
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Gemini model identifier"
    )
    search_provider: Literal["serper", "bing", "serpapi"] = Field(
        default="serper",
        description="Web search provider selected at startup"
    )
    serper_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("serper_api_key", "serper_key"),
        description="Serper.dev API key"
    )
    bing_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("bing_api_key", "bing_key"),
        description="Bing Web Search subscription key"
    )
    serpapi_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("serpapi_api_key", "serp_api_key", "serpapi_key"),
        description="SerpAPI key"
    )
    search_country: str = Field(default="br", description="Search country hint")
    search_language: str = Field(default="pt-BR", description="Search language hint")
    llm_timeout: float = Field(
        default=40.0,
        gt=0,
        description="Seconds allowed for one completion call"
    )
    search_timeout: float = Field(
        default=15.0,
        gt=0,
        description="Seconds allowed for one search call"
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Seconds allowed for a whole classification request"
    )
    max_claims: int = Field(default=2, ge=1, description="Claims extracted per page")
    max_results: int = Field(default=6, ge=1, description="Search results budget per claim")
    claim_text_limit: int = Field(
        default=6000,
        ge=1,
        description="Characters of page text sent to claim extraction"
    )
    page_text_limit: int = Field(
        default=40000,
        ge=1,
        description="Characters of page text accepted per request"
    )
    extra_trusted_domains: str = Field(
        default="",
        description="Additional trusted domains, comma separated"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("llm_provider", "search_provider", mode="before")
    @classmethod
    def normalize_provider(cls, value):
        """Provider names are matched case-insensitively."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def trusted_domain_extras(self) -> list[str]:
        """EXTRA_TRUSTED_DOMAINS split into individual domains."""
        return [d.strip() for d in self.extra_trusted_domains.split(",") if d.strip()]

    def search_api_key(self) -> str:
        """Credential of the configured search provider (may be empty)."""
        return {
            "serper": self.serper_api_key,
            "bing": self.bing_api_key,
            "serpapi": self.serpapi_api_key,
        }[self.search_provider]


# Singleton instance - used by the CLI and logging setup
settings = Settings()
