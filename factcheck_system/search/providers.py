"""Web search providers mapped to a uniform EvidenceItem shape.

Exactly one provider is active per process, chosen by Settings.search_provider:
- serper: google.serper.dev (POST, X-API-KEY header)
- bing: Bing Web Search v7 (GET, Ocp-Apim-Subscription-Key header)
- serpapi: serpapi.com Google engine (GET, api_key parameter)

Missing credentials raise ConfigurationError at construction time, so a
misconfigured deployment fails before any request work is done.

Usage:
    provider = create_search_provider(settings)
    items = await provider.search("claim text", max_results=3)
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from loguru import logger

from factcheck_system.config.settings import Settings
from factcheck_system.corroboration.schemas import EvidenceItem
from factcheck_system.errors import ConfigurationError


class SearchProvider(ABC):
    """
    Base class for search providers.

    Subclasses implement _request() for their wire format and _map_results()
    for their response shape. The HTTP client may be injected (tests use
    httpx.MockTransport); otherwise one is created lazily.

    Attributes:
        api_key: Provider credential
        country: Country hint (e.g. "br")
        language: Language/market hint (e.g. "pt-BR")
    """

    name: str = "search"
    key_setting: str = "API key"

    def __init__(
        self,
        api_key: str,
        country: str = "br",
        language: str = "pt-BR",
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ConfigurationError(f"{self.key_setting} not configured for search provider '{self.name}'")
        self.api_key = api_key
        self.country = country
        self.language = language
        self._http_client = http_client
        self._owns_client = http_client is None
        self.logger = logger.bind(component=f"search.{self.name}")

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            # Per-call deadlines come from the pipeline
            self._http_client = httpx.AsyncClient(timeout=30.0)
        return self._http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def search(self, query: str, max_results: int) -> list[EvidenceItem]:
        """
        Run one search and return up to max_results evidence items.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status.
        """
        response = await self._request(query, max_results)
        response.raise_for_status()
        items = self._map_results(response.json())[:max_results]
        self.logger.debug(f"Search returned {len(items)} results", query=query[:80])
        return items

    @abstractmethod
    async def _request(self, query: str, max_results: int) -> httpx.Response:
        """Issue the provider-specific HTTP request."""

    @abstractmethod
    def _map_results(self, payload: dict[str, Any]) -> list[EvidenceItem]:
        """Map the provider response to EvidenceItem objects."""

    @staticmethod
    def _item(title: Any, url: Any, snippet: Any) -> Optional[EvidenceItem]:
        if not url or not isinstance(url, str):
            return None
        return EvidenceItem(
            title=title if isinstance(title, str) else "",
            url=url,
            snippet=snippet if isinstance(snippet, str) else "",
        )


class SerperSearchProvider(SearchProvider):
    """Google results via serper.dev."""

    name = "serper"
    key_setting = "SERPER_API_KEY"
    endpoint = "https://google.serper.dev/search"

    async def _request(self, query: str, max_results: int) -> httpx.Response:
        return await self.http_client.post(
            self.endpoint,
            json={"q": query, "gl": self.country, "hl": self.language, "num": max_results},
            headers={"X-API-KEY": self.api_key, "Content-Type": "application/json"},
        )

    def _map_results(self, payload: dict[str, Any]) -> list[EvidenceItem]:
        items = (self._item(r.get("title"), r.get("link"), r.get("snippet")) for r in payload.get("organic") or [])
        return [item for item in items if item is not None]


class BingSearchProvider(SearchProvider):
    """Bing Web Search API v7."""

    name = "bing"
    key_setting = "BING_API_KEY"
    endpoint = "https://api.bing.microsoft.com/v7.0/search"

    async def _request(self, query: str, max_results: int) -> httpx.Response:
        return await self.http_client.get(
            self.endpoint,
            params={"q": query, "count": max_results, "mkt": self.language, "safesearch": "Moderate"},
            headers={"Ocp-Apim-Subscription-Key": self.api_key},
        )

    def _map_results(self, payload: dict[str, Any]) -> list[EvidenceItem]:
        values = (payload.get("webPages") or {}).get("value") or []
        items = (self._item(r.get("name"), r.get("url"), r.get("snippet")) for r in values)
        return [item for item in items if item is not None]


class SerpApiSearchProvider(SearchProvider):
    """Google results via serpapi.com."""

    name = "serpapi"
    key_setting = "SERPAPI_API_KEY"
    endpoint = "https://serpapi.com/search.json"

    async def _request(self, query: str, max_results: int) -> httpx.Response:
        return await self.http_client.get(
            self.endpoint,
            params={
                "q": query,
                "engine": "google",
                "hl": self.language.lower(),
                "num": max_results,
                "api_key": self.api_key,
            },
        )

    def _map_results(self, payload: dict[str, Any]) -> list[EvidenceItem]:
        items = (
            self._item(r.get("title"), r.get("link"), r.get("snippet"))
            for r in payload.get("organic_results") or []
        )
        return [item for item in items if item is not None]


SEARCH_PROVIDERS: dict[str, type[SearchProvider]] = {
    "serper": SerperSearchProvider,
    "bing": BingSearchProvider,
    "serpapi": SerpApiSearchProvider,
}


def create_search_provider(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SearchProvider:
    """Instantiate the search provider selected by configuration.

    Raises:
        ConfigurationError: If the provider is unknown or its key is unset.
    """
    provider_cls = SEARCH_PROVIDERS.get(settings.search_provider)
    if provider_cls is None:
        raise ConfigurationError(f"Invalid SEARCH_PROVIDER: {settings.search_provider}")
    return provider_cls(
        api_key=settings.search_api_key(),
        country=settings.search_country,
        language=settings.search_language,
        http_client=http_client,
    )
