"""Stance classification of trusted evidence against a single claim.

The model sees the claim and a 1-based enumerated list of candidates and keeps
only the on-topic ones, labelling each as corroborating or contradicting.
Anything it does not keep is treated as irrelevant and dropped.

Tolerated model mistakes (ignored, never raised):
- indices outside 1..len(candidates), or not integers
- stances other than corroborates / contradicts
- the same index listed twice (first entry wins)
"""

from typing import Any, Optional, Sequence

import structlog

from factcheck_system.config.prompts import (
    EVIDENCE_LINE_TEMPLATE,
    STANCE_SYSTEM_PROMPT,
    STANCE_USER_PROMPT,
)
from factcheck_system.corroboration.schemas import EvidenceItem, Stance, StanceVerdict
from factcheck_system.errors import MalformedCompletionError
from factcheck_system.llm.completion import CompletionService

# Accepted spellings for each stance
_STANCE_ALIASES: dict[str, Stance] = {
    "corroborates": Stance.CORROBORATES,
    "corroborate": Stance.CORROBORATES,
    "supports": Stance.CORROBORATES,
    "corrobora": Stance.CORROBORATES,
    "contradicts": Stance.CONTRADICTS,
    "contradict": Stance.CONTRADICTS,
    "refutes": Stance.CONTRADICTS,
    "contradiz": Stance.CONTRADICTS,
}


class StanceClassifier:
    """Labels candidate evidence as corroborating or contradicting a claim."""

    def __init__(self, completion: CompletionService) -> None:
        self.completion = completion
        self._logger = structlog.get_logger().bind(component="StanceClassifier")

    def build_prompt(self, claim: str, candidates: Sequence[EvidenceItem]) -> str:
        evidence = "\n\n".join(
            EVIDENCE_LINE_TEMPLATE.format(
                index=i,
                title=item.title,
                url=item.url,
                snippet=item.snippet,
            )
            for i, item in enumerate(candidates, start=1)
        )
        return STANCE_USER_PROMPT.format(claim=claim, evidence=evidence)

    async def classify_stance(
        self,
        claim: str,
        candidates: Sequence[EvidenceItem],
    ) -> list[StanceVerdict]:
        """
        Classify candidates against claim.

        Args:
            claim: Claim text.
            candidates: Trusted evidence items, in search order.

        Returns:
            Kept items with their stance, in the order the model listed them.
            Empty without a model call when there are no candidates.
        """
        if not candidates:
            return []

        prompt = self.build_prompt(claim, candidates)
        try:
            payload = await self.completion.complete_json(prompt, system=STANCE_SYSTEM_PROMPT)
        except MalformedCompletionError as e:
            self._logger.warning("stance_output_malformed", error=str(e))
            return []

        verdicts = self._parse_keep(payload, candidates)
        self._logger.info(
            "stance_classified",
            candidates=len(candidates),
            kept=len(verdicts),
            contradicting=sum(1 for v in verdicts if v.stance == Stance.CONTRADICTS),
        )
        return verdicts

    def _parse_keep(
        self,
        payload: dict[str, Any],
        candidates: Sequence[EvidenceItem],
    ) -> list[StanceVerdict]:
        keep = payload.get("keep")
        if not isinstance(keep, list):
            return []

        verdicts: list[StanceVerdict] = []
        used: set[int] = set()
        for entry in keep:
            if not isinstance(entry, dict):
                continue
            index = self._parse_index(entry.get("idx"), len(candidates))
            stance = _STANCE_ALIASES.get(str(entry.get("stance", "")).strip().lower())
            if index is None or stance is None or index in used:
                continue
            used.add(index)
            item = candidates[index - 1]
            verdicts.append(
                StanceVerdict(
                    title=item.title,
                    url=item.url,
                    snippet=item.snippet,
                    stance=stance,
                    reason=str(entry.get("reason") or ""),
                )
            )
        return verdicts

    @staticmethod
    def _parse_index(raw: Any, count: int) -> Optional[int]:
        """1-based index within range, or None."""
        if isinstance(raw, bool):
            return None
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        elif isinstance(raw, str) and raw.strip().isdigit():
            raw = int(raw.strip())
        if not isinstance(raw, int) or not 1 <= raw <= count:
            return None
        return raw
