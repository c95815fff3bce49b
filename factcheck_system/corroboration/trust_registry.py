"""Domain trust registry: the hard gate applied to evidence before stance classification.

A URL is trusted when its hostname, or any dot-suffix of it, is a registered
domain. Every suffix is tested, so a deep host such as
piaui.folha.uol.com.br matches folha.uol.com.br and uol.com.br alike, while
fakeuol.com.br never matches uol.com.br.

Usage:
    from factcheck_system.corroboration.trust_registry import DomainTrustRegistry

    registry = DomainTrustRegistry()
    registry.is_trusted("https://noticias.uol.com.br/x")  # True
"""

from typing import Iterable, Optional
from urllib.parse import urlparse

from factcheck_system.config.trusted_domains import TRUSTED_DOMAINS


def _normalize_domain(domain: str) -> str:
    return domain.strip().lower().rstrip(".")


class DomainTrustRegistry:
    """Read-only set of trusted hostnames, built once per process."""

    def __init__(
        self,
        domains: Optional[Iterable[str]] = None,
        extra_domains: Optional[Iterable[str]] = None,
    ) -> None:
        """Build the registry.

        Args:
            domains: Trusted domains. Defaults to TRUSTED_DOMAINS.
            extra_domains: Domains added on top (e.g. EXTRA_TRUSTED_DOMAINS).
        """
        source = list(TRUSTED_DOMAINS if domains is None else domains)
        source.extend(extra_domains or [])
        self._domains = frozenset(
            normalized for normalized in (_normalize_domain(d) for d in source) if normalized
        )

    @property
    def domains(self) -> frozenset[str]:
        return self._domains

    def __len__(self) -> int:
        return len(self._domains)

    def __contains__(self, domain: str) -> bool:
        return _normalize_domain(domain) in self._domains

    @staticmethod
    def host_from_url(url: str) -> str:
        """Lower-cased hostname of url, or empty string when unparseable."""
        try:
            host = urlparse(url.strip()).hostname
        except (ValueError, AttributeError):
            return ""
        return (host or "").rstrip(".")

    def is_trusted(self, url: str) -> bool:
        """True if url's host equals or descends from a registered domain.

        Never raises; malformed URLs are simply untrusted.
        """
        host = self.host_from_url(url)
        if not host:
            return False
        labels = host.split(".")
        return any(".".join(labels[i:]) in self._domains for i in range(len(labels)))

    def filter_trusted(self, items: Iterable) -> list:
        """Keep only items whose ``url`` attribute is trusted, preserving order."""
        return [item for item in items if self.is_trusted(item.url)]
