"""Base content classification: fake / doubtful / trustworthy from page text alone.

The model is given the page text plus quick lexical heuristics. This is the one
model call a request cannot do without; transport failures and timeouts are
surfaced by the orchestrator as BaseClassificationError. Unparseable output
falls back to a neutral default assessment instead.
"""

import json
import re
import unicodedata
from typing import Any, Optional

import structlog

from factcheck_system.config.prompts import (
    BASE_CLASSIFICATION_SYSTEM_PROMPT,
    BASE_CLASSIFICATION_USER_PROMPT,
)
from factcheck_system.corroboration.schemas import (
    BaseClassification,
    Label,
    Page,
    QuickHeuristics,
)
from factcheck_system.corroboration.score_calibrator import clamp_unit
from factcheck_system.errors import MalformedCompletionError
from factcheck_system.llm.completion import CompletionService

_ALLCAPS_WORD = re.compile(r"\b[A-ZÀ-Ý]{5,}\b")
_CLICKBAIT = re.compile(
    r"\b(URGENTE|CHOCANTE|VOCÊ NÃO VAI ACREDITAR|IMPERDÍVEL|BOMBA|EXCLUSIVO"
    r"|BREAKING|SHOCKING|YOU WON'T BELIEVE|MUST SEE)\b",
    re.IGNORECASE,
)
_SOURCE_MENTION = re.compile(
    r"\b(fonte|refer(ê|e)ncia|estudo|source|study|doi\.org|scielo|pubmed"
    r"|g1\.globo|agenciabrasil|bbc|reuters|apnews|nyt|elpais)\b",
    re.IGNORECASE,
)

LABEL_ALIASES: dict[str, Label] = {
    "fake": Label.FAKE,
    "false": Label.FAKE,
    "falso": Label.FAKE,
    "doubtful": Label.DOUBTFUL,
    "duvidoso": Label.DOUBTFUL,
    "uncertain": Label.DOUBTFUL,
    "trustworthy": Label.TRUSTWORTHY,
    "reliable": Label.TRUSTWORTHY,
    "confiavel": Label.TRUSTWORTHY,
    "confiável": Label.TRUSTWORTHY,
}

DEFAULT_CLASSIFICATION = BaseClassification(
    label=Label.DOUBTFUL,
    score=0.6,
    reasons=["Default assessment."],
)


def quick_heuristics(page: Page) -> QuickHeuristics:
    """Cheap lexical signals over title + text."""
    text = unicodedata.normalize("NFC", f"{page.title} {page.text}")
    return QuickHeuristics(
        exclam=text.count("!"),
        allcaps=len(_ALLCAPS_WORD.findall(text)),
        clickbait=bool(_CLICKBAIT.search(text)),
        has_sources=bool(_SOURCE_MENTION.search(text)),
    )


def normalize_label(raw: Any) -> Optional[Label]:
    if not isinstance(raw, str):
        return None
    return LABEL_ALIASES.get(raw.strip().lower())


class BaseClassifier:
    """Produces the BaseClassification that calibration starts from."""

    def __init__(self, completion: CompletionService) -> None:
        self.completion = completion
        self._logger = structlog.get_logger().bind(component="BaseClassifier")

    def build_prompt(self, page: Page, heuristics: QuickHeuristics) -> str:
        text = (f"{page.title}. " if page.title else "") + page.text
        return BASE_CLASSIFICATION_USER_PROMPT.format(
            heuristics=json.dumps(heuristics.model_dump()),
            text=text,
        )

    async def classify(self, page: Page, heuristics: QuickHeuristics) -> BaseClassification:
        """
        Classify page content.

        Returns:
            The model's classification, or DEFAULT_CLASSIFICATION when its
            output is malformed or carries an unknown label.

        Raises:
            Any transport error from the completion service.
        """
        prompt = self.build_prompt(page, heuristics)
        try:
            payload = await self.completion.complete_json(prompt, system=BASE_CLASSIFICATION_SYSTEM_PROMPT)
        except MalformedCompletionError as e:
            self._logger.warning("base_output_malformed", error=str(e))
            return DEFAULT_CLASSIFICATION.model_copy(deep=True)

        label = normalize_label(payload.get("label"))
        if label is None:
            self._logger.warning("base_label_unknown", label=str(payload.get("label"))[:40])
            return DEFAULT_CLASSIFICATION.model_copy(deep=True)

        reasons = payload.get("reasons")
        if not isinstance(reasons, list):
            reasons = []
        classification = BaseClassification(
            label=label,
            score=clamp_unit(payload.get("score")),
            reasons=[str(r) for r in reasons if r],
        )
        self._logger.info("base_classified", label=label.value, score=classification.score)
        return classification
