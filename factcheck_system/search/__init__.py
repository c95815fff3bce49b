"""Pluggable web search providers."""

from factcheck_system.search.providers import (
    SEARCH_PROVIDERS,
    BingSearchProvider,
    SearchProvider,
    SerpApiSearchProvider,
    SerperSearchProvider,
    create_search_provider,
)

__all__ = [
    "SEARCH_PROVIDERS",
    "BingSearchProvider",
    "SearchProvider",
    "SerpApiSearchProvider",
    "SerperSearchProvider",
    "create_search_provider",
]
