"""Tests for DomainTrustRegistry.

Tests cover:
- Exact and subdomain membership (every dot-suffix is tested)
- Look-alike hosts that merely end with a trusted name
- Case, trailing dot, port and userinfo handling
- Malformed URLs never raise
- Extra domains from configuration
- filter_trusted ordering
"""

import pytest

from factcheck_system.config.trusted_domains import TRUSTED_DOMAINS
from factcheck_system.corroboration.schemas import EvidenceItem
from factcheck_system.corroboration.trust_registry import DomainTrustRegistry


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def registry() -> DomainTrustRegistry:
    return DomainTrustRegistry()


# ── Membership ────────────────────────────────────────────────────────────


class TestIsTrusted:
    """Tests for hostname membership."""

    def test_exact_domain(self, registry: DomainTrustRegistry) -> None:
        assert registry.is_trusted("https://reuters.com/world/article-1")

    def test_subdomain(self, registry: DomainTrustRegistry) -> None:
        assert registry.is_trusted("https://www.reuters.com/world/article-1")

    def test_deep_subdomain_matches_any_suffix(self) -> None:
        registry = DomainTrustRegistry(domains=["uol.com.br"])
        assert registry.is_trusted("https://piaui.folha.uol.com.br/lupa/2024/x")

    def test_lookalike_host_rejected(self, registry: DomainTrustRegistry) -> None:
        assert not registry.is_trusted("https://fakereuters.com/article")
        assert not registry.is_trusted("https://reuters.com.evil.net/article")

    def test_unknown_host_rejected(self, registry: DomainTrustRegistry) -> None:
        assert not registry.is_trusted("https://randomblog.net/post")

    def test_case_insensitive(self, registry: DomainTrustRegistry) -> None:
        assert registry.is_trusted("HTTPS://WWW.BBC.COM/news")

    def test_port_and_userinfo_ignored(self, registry: DomainTrustRegistry) -> None:
        assert registry.is_trusted("https://user:pw@apnews.com:8443/article")

    def test_trailing_dot(self, registry: DomainTrustRegistry) -> None:
        assert registry.is_trusted("https://snopes.com./fact-check/x")

    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "://", "https://", "http://[::1", "mailto:someone@reuters"],
    )
    def test_malformed_urls_untrusted(self, registry: DomainTrustRegistry, url: str) -> None:
        assert registry.is_trusted(url) is False


# ── Construction ──────────────────────────────────────────────────────────


class TestConstruction:
    """Tests for registry construction."""

    def test_defaults_loaded(self, registry: DomainTrustRegistry) -> None:
        assert len(registry) == len(set(TRUSTED_DOMAINS))
        assert "aosfatos.org" in registry

    def test_domains_normalized(self) -> None:
        registry = DomainTrustRegistry(domains=["  Example.ORG. ", ""])
        assert registry.domains == frozenset({"example.org"})

    def test_extra_domains_added(self) -> None:
        registry = DomainTrustRegistry(extra_domains=["lupa.news"])
        assert registry.is_trusted("https://www.lupa.news/checagem")
        assert registry.is_trusted("https://reuters.com/a")

    def test_explicit_domains_replace_defaults(self) -> None:
        registry = DomainTrustRegistry(domains=["example.org"])
        assert not registry.is_trusted("https://reuters.com/a")


# ── Filtering ─────────────────────────────────────────────────────────────


class TestFilterTrusted:
    """Tests for the evidence gate."""

    def test_keeps_only_trusted_in_order(self, registry: DomainTrustRegistry) -> None:
        items = [
            EvidenceItem(title="a", url="https://bbc.com/a"),
            EvidenceItem(title="b", url="https://randomblog.net/b"),
            EvidenceItem(title="c", url="https://aosfatos.org/c"),
        ]

        kept = registry.filter_trusted(items)

        assert [item.title for item in kept] == ["a", "c"]

    def test_empty_input(self, registry: DomainTrustRegistry) -> None:
        assert registry.filter_trusted([]) == []
