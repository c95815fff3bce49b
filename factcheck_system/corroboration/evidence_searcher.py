"""Evidence search session for one claim.

Issues the label-aware query variants one by one against the configured
provider and merges the results:
- each variant is issued once, asking for ceil(max_results / 2) results
- results without an http(s) URL are skipped
- results are de-duplicated by URL, first occurrence wins
- the session stops once 2 x max_results unique items are collected, or
  when the variants run out

Every provider call runs under the search deadline. A failed call fails the
whole session; the orchestrator then continues with no evidence for the claim.

Usage:
    searcher = EvidenceSearcher(provider, search_timeout=15.0)
    result = await searcher.search(claim, Label.FAKE, page, max_results=6)
    evidence = result.value_or([])
"""

import math
import re
from typing import TYPE_CHECKING, Optional

import structlog

from factcheck_system.corroboration.query_generator import QueryGenerator
from factcheck_system.corroboration.schemas import EvidenceItem, Label, Page
from factcheck_system.corroboration.stages import StageResult, run_with_deadline

if TYPE_CHECKING:
    from factcheck_system.search.providers import SearchProvider

_HTTP_URL = re.compile(r"^https?:", re.IGNORECASE)


def is_valid_evidence_url(url: Optional[str]) -> bool:
    return bool(url) and bool(_HTTP_URL.match(url))


class EvidenceSearcher:
    """Runs a de-duplicating multi-variant search session per claim."""

    STAGE = "evidence_search"

    def __init__(
        self,
        provider: "SearchProvider",
        query_generator: Optional[QueryGenerator] = None,
        search_timeout: float = 15.0,
    ) -> None:
        """Initialize EvidenceSearcher.

        Args:
            provider: The configured search provider.
            query_generator: Label-aware query builder.
            search_timeout: Deadline in seconds for each provider call.
        """
        self.provider = provider
        self.query_generator = query_generator or QueryGenerator()
        self.search_timeout = search_timeout
        self._logger = structlog.get_logger().bind(component="EvidenceSearcher")

    async def search(
        self,
        claim: str,
        label: Label,
        page: Page,
        max_results: int = 6,
    ) -> StageResult[list[EvidenceItem]]:
        """Collect candidate evidence for claim.

        Args:
            claim: Claim text.
            label: Base label steering query construction.
            page: Source page (publication year hint).
            max_results: Results budget; the bucket holds up to twice this.

        Returns:
            StageResult with the merged evidence bucket, or the first failure.
        """
        queries = self.query_generator.generate_queries(claim, label, page)
        per_query = max(1, math.ceil(max_results / 2))
        cap = max_results * 2

        bucket: list[EvidenceItem] = []
        seen_urls: set[str] = set()
        issued = 0

        for query in queries:
            issued += 1
            result = await run_with_deadline(
                self.STAGE,
                self.provider.search(query, per_query),
                self.search_timeout,
            )
            if not result.ok:
                self._logger.warning(
                    "search_session_failed",
                    query=query[:80],
                    failure=result.failure.value,
                    queries_issued=issued,
                )
                return StageResult.failed(self.STAGE, result.failure, result.detail)

            for item in result.value or []:
                if not is_valid_evidence_url(item.url) or item.url in seen_urls:
                    continue
                seen_urls.add(item.url)
                bucket.append(item)

            if len(bucket) >= cap:
                break

        self._logger.info(
            "search_session_complete",
            claim=claim[:80],
            queries_issued=issued,
            queries_available=len(queries),
            candidates=len(bucket),
        )
        return StageResult.success(self.STAGE, bucket)
