"""Label-aware verdict aggregation per claim and across claims.

Per-claim status, first matching rule wins:
1. Any contradicting evidence and base label FAKE/DOUBTFUL -> CONTRADICTED
2. Any corroborating evidence and base label TRUSTWORTHY -> CORROBORATED
3. More contradicting than corroborating -> CONTRADICTED
   More corroborating than contradicting -> CORROBORATED
   Tie (including none at all) -> INCONCLUSIVE

Sources are the first six items of the winning side (contradicting when the
claim is contradicted, corroborating otherwise).

Overall status compares the number of corroborated and contradicted claims;
a tie is INCONCLUSIVE. Suggested sources are the URL-unique union of every
claim's sources.

Usage:
    aggregator = VerdictAggregator(trust_registry=registry)
    verdict = aggregator.aggregate(claim, stance_verdicts, Label.FAKE)
    result = aggregator.combine([verdict, ...])
"""

from typing import Optional, Sequence

import structlog

from factcheck_system.corroboration.schemas import (
    MAX_SOURCES_PER_CLAIM,
    ClaimVerdict,
    CorroborationResult,
    CorroborationStatus,
    Label,
    SourceRef,
    Stance,
    StanceVerdict,
)
from factcheck_system.corroboration.trust_registry import DomainTrustRegistry


class VerdictAggregator:
    """Turns stance counts into claim and page verdicts."""

    def __init__(
        self,
        trust_registry: Optional[DomainTrustRegistry] = None,
        max_sources: int = MAX_SOURCES_PER_CLAIM,
    ) -> None:
        """Initialize VerdictAggregator.

        Args:
            trust_registry: When given, stance verdicts are re-checked against
                the registry and untrusted ones ignored.
            max_sources: Sources kept per claim (capped at MAX_SOURCES_PER_CLAIM).
        """
        self.trust_registry = trust_registry
        self.max_sources = min(max_sources, MAX_SOURCES_PER_CLAIM)
        self._logger = structlog.get_logger().bind(component="VerdictAggregator")

    def aggregate(
        self,
        claim: str,
        stance_verdicts: Sequence[StanceVerdict],
        base_label: Label,
    ) -> ClaimVerdict:
        """Decide the status of one claim.

        Args:
            claim: Claim text.
            stance_verdicts: Kept evidence with stances for this claim only.
            base_label: Base classification label of the page.

        Returns:
            ClaimVerdict with status and up to max_sources winning sources.
        """
        verdicts = list(stance_verdicts)
        if self.trust_registry is not None:
            verdicts = self.trust_registry.filter_trusted(verdicts)

        contradicting = [v for v in verdicts if v.stance == Stance.CONTRADICTS]
        corroborating = [v for v in verdicts if v.stance == Stance.CORROBORATES]
        status = self.decide_status(len(corroborating), len(contradicting), Label(base_label))

        chosen = contradicting if status == CorroborationStatus.CONTRADICTED else corroborating

        self._logger.info(
            "claim_aggregated",
            claim=claim[:80],
            status=status.value,
            corroborating=len(corroborating),
            contradicting=len(contradicting),
        )
        return ClaimVerdict(claim=claim, status=status, sources=chosen[: self.max_sources])

    @staticmethod
    def decide_status(corroborating: int, contradicting: int, base_label: Label) -> CorroborationStatus:
        if contradicting > 0 and base_label.is_suspect:
            return CorroborationStatus.CONTRADICTED
        if corroborating > 0 and base_label == Label.TRUSTWORTHY:
            return CorroborationStatus.CORROBORATED
        if contradicting > corroborating:
            return CorroborationStatus.CONTRADICTED
        if corroborating > contradicting:
            return CorroborationStatus.CORROBORATED
        return CorroborationStatus.INCONCLUSIVE

    def combine(self, claim_verdicts: Sequence[ClaimVerdict]) -> CorroborationResult:
        """Fold per-claim verdicts into the page-level result.

        The outcome does not depend on the order of claim_verdicts, except for
        the order of suggested sources (first seen first).
        """
        positive = sum(1 for v in claim_verdicts if v.status == CorroborationStatus.CORROBORATED)
        negative = sum(1 for v in claim_verdicts if v.status == CorroborationStatus.CONTRADICTED)

        if negative > positive:
            overall = CorroborationStatus.CONTRADICTED
        elif positive > negative:
            overall = CorroborationStatus.CORROBORATED
        else:
            overall = CorroborationStatus.INCONCLUSIVE

        suggested: list[SourceRef] = []
        seen_urls: set[str] = set()
        for verdict in claim_verdicts:
            for source in verdict.sources:
                if source.url in seen_urls:
                    continue
                if self.trust_registry is not None and not self.trust_registry.is_trusted(source.url):
                    continue
                seen_urls.add(source.url)
                suggested.append(SourceRef(title=source.title, url=source.url))

        self._logger.info(
            "corroboration_combined",
            overall=overall.value,
            corroborated_claims=positive,
            contradicted_claims=negative,
            suggested_sources=len(suggested),
        )
        return CorroborationResult(
            overall=overall,
            verdicts=list(claim_verdicts),
            suggested_sources=suggested,
        )
