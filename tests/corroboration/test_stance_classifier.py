"""Tests for StanceClassifier.

Tests cover:
- No candidates -> no model call
- 1-based index mapping back to candidates
- Out-of-range, non-integer and duplicate indices ignored
- Unknown stances ignored, aliases accepted
- Malformed output -> nothing kept
"""

import json

import pytest

from factcheck_system.corroboration.schemas import EvidenceItem, Stance
from factcheck_system.corroboration.stance_classifier import StanceClassifier


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def candidates() -> list[EvidenceItem]:
    return [
        EvidenceItem(title="Lupa checa vacina", url="https://piaui.folha.uol.com.br/lupa/1", snippet="Falso"),
        EvidenceItem(title="BBC explica", url="https://bbc.com/news/2", snippet="Não altera"),
        EvidenceItem(title="Outro tema", url="https://reuters.com/3", snippet="Economia"),
    ]


def _keep(*entries: dict) -> str:
    return json.dumps({"keep": list(entries)})


# ── Tests ─────────────────────────────────────────────────────────────────


class TestPrompt:
    def test_enumerates_from_one(self, scripted, candidates: list[EvidenceItem]) -> None:
        prompt = StanceClassifier(scripted()).build_prompt("claim", candidates)

        assert "[1] Lupa checa vacina — https://piaui.folha.uol.com.br/lupa/1" in prompt
        assert "[3] Outro tema" in prompt
        assert '"claim"' in prompt


class TestClassifyStance:
    """Tests for keep-list parsing."""

    @pytest.mark.asyncio
    async def test_empty_candidates_skip_model(self, scripted) -> None:
        completion = scripted()

        assert await StanceClassifier(completion).classify_stance("claim", []) == []
        assert completion.calls == 0

    @pytest.mark.asyncio
    async def test_maps_indices(self, scripted, candidates: list[EvidenceItem]) -> None:
        reply = _keep(
            {"idx": 2, "stance": "contradicts", "reason": "BBC desmente"},
            {"idx": 1, "stance": "contradicts"},
        )

        verdicts = await StanceClassifier(scripted(reply)).classify_stance("claim", candidates)

        assert [v.url for v in verdicts] == [candidates[1].url, candidates[0].url]
        assert all(v.stance == Stance.CONTRADICTS for v in verdicts)
        assert verdicts[0].reason == "BBC desmente"
        assert verdicts[1].reason == ""
        assert verdicts[0].title == "BBC explica"

    @pytest.mark.asyncio
    async def test_unkept_items_dropped(self, scripted, candidates: list[EvidenceItem]) -> None:
        reply = _keep({"idx": 1, "stance": "corroborates"})

        verdicts = await StanceClassifier(scripted(reply)).classify_stance("claim", candidates)

        assert len(verdicts) == 1

    @pytest.mark.asyncio
    async def test_invalid_indices_ignored(self, scripted, candidates: list[EvidenceItem]) -> None:
        reply = _keep(
            {"idx": 0, "stance": "corroborates"},
            {"idx": 4, "stance": "corroborates"},
            {"idx": -1, "stance": "corroborates"},
            {"idx": "two", "stance": "corroborates"},
            {"idx": True, "stance": "corroborates"},
            {"idx": 1.5, "stance": "corroborates"},
            {"idx": None, "stance": "corroborates"},
            {"idx": "3", "stance": "corroborates"},
        )

        verdicts = await StanceClassifier(scripted(reply)).classify_stance("claim", candidates)

        assert [v.url for v in verdicts] == [candidates[2].url]

    @pytest.mark.asyncio
    async def test_duplicate_index_first_wins(self, scripted, candidates: list[EvidenceItem]) -> None:
        reply = _keep(
            {"idx": 1, "stance": "contradicts"},
            {"idx": 1, "stance": "corroborates"},
        )

        verdicts = await StanceClassifier(scripted(reply)).classify_stance("claim", candidates)

        assert len(verdicts) == 1
        assert verdicts[0].stance == Stance.CONTRADICTS

    @pytest.mark.asyncio
    async def test_stances_normalized(self, scripted, candidates: list[EvidenceItem]) -> None:
        reply = _keep(
            {"idx": 1, "stance": "irrelevant"},
            {"idx": 2, "stance": " Contradiz "},
            {"idx": 3, "stance": "SUPPORTS"},
        )

        verdicts = await StanceClassifier(scripted(reply)).classify_stance("claim", candidates)

        assert [(v.url, v.stance) for v in verdicts] == [
            (candidates[1].url, Stance.CONTRADICTS),
            (candidates[2].url, Stance.CORROBORATES),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["no json", '{"keep": "all"}', '{"keep": [1, 2]}', "{}"])
    async def test_malformed_keeps_nothing(
        self, scripted, candidates: list[EvidenceItem], reply: str
    ) -> None:
        verdicts = await StanceClassifier(scripted(reply)).classify_stance("claim", candidates)

        assert verdicts == []
