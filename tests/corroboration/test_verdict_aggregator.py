"""Tests for VerdictAggregator.

Tests cover:
- Label-biased per-claim rules (suspect labels favour contradiction,
  trustworthy favours corroboration)
- Majority and tie rules
- Source selection (winning side only, capped at six)
- Overall status and suggested-source union
- Trust re-check when a registry is attached
"""

import pytest

from factcheck_system.corroboration.schemas import (
    ClaimVerdict,
    CorroborationStatus,
    Label,
    Stance,
    StanceVerdict,
)
from factcheck_system.corroboration.trust_registry import DomainTrustRegistry
from factcheck_system.corroboration.verdict_aggregator import VerdictAggregator


# ── Helpers ──────────────────────────────────────────────────────────────


def _stance(n: int, stance: Stance, domain: str = "reuters.com") -> StanceVerdict:
    return StanceVerdict(title=f"item {n}", url=f"https://{domain}/{stance.value}/{n}", stance=stance)


def _many(corroborating: int, contradicting: int) -> list[StanceVerdict]:
    items = [_stance(i, Stance.CORROBORATES) for i in range(corroborating)]
    items += [_stance(i, Stance.CONTRADICTS) for i in range(contradicting)]
    return items


def _verdict(status: CorroborationStatus, *urls: str) -> ClaimVerdict:
    return ClaimVerdict(
        claim=f"claim {status.value}",
        status=status,
        sources=[StanceVerdict(title=url, url=url, stance=Stance.CORROBORATES) for url in urls],
    )


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def aggregator() -> VerdictAggregator:
    return VerdictAggregator()


# ── Per-claim status ──────────────────────────────────────────────────────


class TestDecideStatus:
    """Rule order for a single claim."""

    @pytest.mark.parametrize(
        "corr, contra, label, expected",
        [
            (3, 1, Label.FAKE, CorroborationStatus.CONTRADICTED),
            (5, 1, Label.DOUBTFUL, CorroborationStatus.CONTRADICTED),
            (1, 3, Label.TRUSTWORTHY, CorroborationStatus.CORROBORATED),
            (2, 0, Label.FAKE, CorroborationStatus.CORROBORATED),
            (0, 2, Label.TRUSTWORTHY, CorroborationStatus.CONTRADICTED),
            (0, 0, Label.FAKE, CorroborationStatus.INCONCLUSIVE),
            (0, 0, Label.TRUSTWORTHY, CorroborationStatus.INCONCLUSIVE),
        ],
    )
    def test_rules(self, corr: int, contra: int, label: Label, expected: CorroborationStatus) -> None:
        assert VerdictAggregator.decide_status(corr, contra, label) == expected


class TestAggregate:
    """Tests for ClaimVerdict construction."""

    def test_contradicted_keeps_contradicting_sources(self, aggregator: VerdictAggregator) -> None:
        verdict = aggregator.aggregate("c", _many(1, 3), Label.FAKE)

        assert verdict.status == CorroborationStatus.CONTRADICTED
        assert len(verdict.sources) == 3
        assert all(s.stance == Stance.CONTRADICTS for s in verdict.sources)

    def test_corroborated_keeps_corroborating_sources(self, aggregator: VerdictAggregator) -> None:
        verdict = aggregator.aggregate("c", _many(2, 1), Label.TRUSTWORTHY)

        assert verdict.status == CorroborationStatus.CORROBORATED
        assert [s.stance for s in verdict.sources] == [Stance.CORROBORATES] * 2

    def test_no_evidence_inconclusive(self, aggregator: VerdictAggregator) -> None:
        verdict = aggregator.aggregate("c", [], Label.DOUBTFUL)

        assert verdict.status == CorroborationStatus.INCONCLUSIVE
        assert verdict.sources == []

    def test_sources_capped_at_six(self, aggregator: VerdictAggregator) -> None:
        verdict = aggregator.aggregate("c", _many(0, 9), Label.FAKE)

        assert len(verdict.sources) == 6
        assert verdict.sources[0].title == "item 0"

    def test_registry_recheck(self) -> None:
        aggregator = VerdictAggregator(trust_registry=DomainTrustRegistry(domains=["reuters.com"]))
        stances = [
            _stance(1, Stance.CONTRADICTS, domain="randomblog.net"),
            _stance(2, Stance.CORROBORATES),
        ]

        verdict = aggregator.aggregate("c", stances, Label.FAKE)

        assert verdict.status == CorroborationStatus.CORROBORATED
        assert all("randomblog" not in s.url for s in verdict.sources)


# ── Overall ───────────────────────────────────────────────────────────────


class TestCombine:
    """Page-level combination."""

    def test_majority_corroborated(self, aggregator: VerdictAggregator) -> None:
        result = aggregator.combine([
            _verdict(CorroborationStatus.CORROBORATED),
            _verdict(CorroborationStatus.CORROBORATED),
            _verdict(CorroborationStatus.CONTRADICTED),
        ])
        assert result.overall == CorroborationStatus.CORROBORATED

    def test_tie_inconclusive(self, aggregator: VerdictAggregator) -> None:
        result = aggregator.combine([
            _verdict(CorroborationStatus.CORROBORATED),
            _verdict(CorroborationStatus.CONTRADICTED),
        ])
        assert result.overall == CorroborationStatus.INCONCLUSIVE

    def test_inconclusive_claims_do_not_count(self, aggregator: VerdictAggregator) -> None:
        result = aggregator.combine([
            _verdict(CorroborationStatus.CONTRADICTED),
            _verdict(CorroborationStatus.INCONCLUSIVE),
            _verdict(CorroborationStatus.INCONCLUSIVE),
        ])
        assert result.overall == CorroborationStatus.CONTRADICTED

    def test_empty(self, aggregator: VerdictAggregator) -> None:
        result = aggregator.combine([])
        assert result.overall == CorroborationStatus.INCONCLUSIVE
        assert result.summary == "Search inconclusive."

    def test_order_independent(self, aggregator: VerdictAggregator) -> None:
        verdicts = [
            _verdict(CorroborationStatus.CONTRADICTED),
            _verdict(CorroborationStatus.CORROBORATED),
            _verdict(CorroborationStatus.CONTRADICTED),
        ]
        assert aggregator.combine(verdicts).overall == aggregator.combine(verdicts[::-1]).overall

    def test_suggested_sources_union_dedupes(self, aggregator: VerdictAggregator) -> None:
        result = aggregator.combine([
            _verdict(CorroborationStatus.CONTRADICTED, "https://bbc.com/a", "https://aosfatos.org/b"),
            _verdict(CorroborationStatus.CONTRADICTED, "https://bbc.com/a", "https://reuters.com/c"),
        ])

        assert [s.url for s in result.suggested_sources] == [
            "https://bbc.com/a",
            "https://aosfatos.org/b",
            "https://reuters.com/c",
        ]
        assert result.summary == "Search contradicted."
