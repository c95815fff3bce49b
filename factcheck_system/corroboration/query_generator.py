"""Label-aware query generation for evidence search.

The base label decides which evidence is worth looking for first:
- FAKE / DOUBTFUL: debunking vocabulary and fact-checker site: filters
- TRUSTWORTHY: coverage vocabulary and reference-outlet site: filters

Both strategies end with the base variants: the claim unquoted and quoted,
with the publication-year hint when the page has one, then without it.
Duplicate query strings are removed so no variant is issued twice.

Usage:
    from factcheck_system.corroboration.query_generator import QueryGenerator

    generator = QueryGenerator()
    queries = generator.generate_queries(claim, Label.FAKE, page)
"""

import re
from typing import Optional, Sequence

import structlog

from factcheck_system.config.trusted_domains import (
    FACT_CHECK_SITE_FILTERS,
    NEWS_OUTLET_SITE_FILTERS,
)
from factcheck_system.corroboration.schemas import Label, Page

_WHITESPACE = re.compile(r"\s+")

DEBUNK_VOCABULARY = "false OR hoax OR staged OR deepfake"
FACT_CHECK_VOCABULARY = "debunked OR fact-check OR verification"
COVERAGE_VOCABULARY = "confirmed OR details OR coverage"


class QueryGenerator:
    """Builds ordered, de-duplicated search query variants for one claim."""

    def __init__(
        self,
        fact_check_sites: Optional[Sequence[str]] = None,
        news_sites: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize QueryGenerator.

        Args:
            fact_check_sites: site: filters for debunking queries.
            news_sites: site: filters for coverage queries.
        """
        self.fact_check_filter = " OR ".join(fact_check_sites or FACT_CHECK_SITE_FILTERS)
        self.news_filter = " OR ".join(news_sites or NEWS_OUTLET_SITE_FILTERS)
        self._logger = structlog.get_logger().bind(component="QueryGenerator")

    def generate_queries(self, claim: str, label: Label, page: Page) -> list[str]:
        """Generate query variants for claim, biased by the base label.

        Args:
            claim: Claim text.
            label: Base classification label of the page.
            page: Page the claim came from (for the publication year).

        Returns:
            Query strings in issue order, without duplicates. Empty for a blank claim.
        """
        clean = self.clean_claim(claim)
        if not clean:
            return []

        if Label(label).is_suspect:
            queries = self._debunking_queries(clean)
        else:
            queries = self._coverage_queries(clean)
        queries.extend(self._base_queries(clean, page.publication_year))

        unique = list(dict.fromkeys(queries))
        self._logger.debug(
            "queries_generated",
            label=Label(label).value,
            generated=len(queries),
            unique=len(unique),
        )
        return unique

    @staticmethod
    def clean_claim(claim: str) -> str:
        """Collapse whitespace and strip quotes that would break exact-phrase search."""
        return _WHITESPACE.sub(" ", claim or "").replace('"', "").strip()

    # ── FAKE / DOUBTFUL ──────────────────────────────────────────────

    def _debunking_queries(self, claim: str) -> list[str]:
        return [
            f"{claim} {DEBUNK_VOCABULARY}",
            f"{claim} {FACT_CHECK_VOCABULARY}",
            f'"{claim}" {self.fact_check_filter}',
            f"{claim} {self.fact_check_filter}",
        ]

    # ── TRUSTWORTHY ──────────────────────────────────────────────────

    def _coverage_queries(self, claim: str) -> list[str]:
        return [
            f'"{claim}" {self.news_filter}',
            f"{claim} {self.news_filter}",
            f"{claim} {COVERAGE_VOCABULARY}",
        ]

    # ── Base variants ────────────────────────────────────────────────

    def _base_queries(self, claim: str, year: str) -> list[str]:
        queries: list[str] = []
        if year:
            queries.extend([f"{claim} {year}", f'"{claim}" {year}'])
        queries.extend([claim, f'"{claim}"'])
        return queries
