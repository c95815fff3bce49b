"""Claim extraction: pulls short, checkable factual claims out of page text.

One completion call per page. The text sent is the title plus the body,
truncated to text_limit characters. Malformed model output yields no claims
rather than an error; the orchestrator treats an empty list as the end of
corroboration for the request.
"""

from typing import Any

import structlog

from factcheck_system.config.prompts import (
    CLAIM_EXTRACTION_SYSTEM_PROMPT,
    CLAIM_EXTRACTION_USER_PROMPT,
)
from factcheck_system.corroboration.schemas import Page
from factcheck_system.errors import MalformedCompletionError
from factcheck_system.llm.completion import CompletionService

DEFAULT_TEXT_LIMIT = 6000


class ClaimExtractor:
    """
    Extracts up to max_claims factual claims from a page.

    Attributes:
        completion: Completion service used for extraction
        text_limit: Maximum characters of page text sent to the model
    """

    def __init__(self, completion: CompletionService, text_limit: int = DEFAULT_TEXT_LIMIT) -> None:
        self.completion = completion
        self.text_limit = text_limit
        self._logger = structlog.get_logger().bind(component="ClaimExtractor")

    def build_prompt(self, page: Page, max_claims: int) -> str:
        text = (f"{page.title}. " if page.title else "") + (page.text or "")
        return CLAIM_EXTRACTION_USER_PROMPT.format(
            max_claims=max_claims,
            text=text[: self.text_limit],
        )

    async def extract_claims(self, page: Page, max_claims: int = 2) -> list[str]:
        """
        Extract claims from page.

        Args:
            page: Page to read.
            max_claims: Upper bound on returned claims.

        Returns:
            Claims in extraction order, at most max_claims. Empty list when the
            model output is malformed or contains no usable claims.
        """
        if max_claims < 1:
            return []

        prompt = self.build_prompt(page, max_claims)
        try:
            payload = await self.completion.complete_json(prompt, system=CLAIM_EXTRACTION_SYSTEM_PROMPT)
        except MalformedCompletionError as e:
            self._logger.warning("claim_output_malformed", error=str(e))
            return []

        claims = self._parse_claims(payload)[:max_claims]
        self._logger.info("claims_extracted", count=len(claims), max_claims=max_claims)
        return claims

    def _parse_claims(self, payload: dict[str, Any]) -> list[str]:
        raw = payload.get("claims")
        if not isinstance(raw, list):
            self._logger.warning("claims_field_missing", keys=sorted(payload.keys()))
            return []

        claims: list[str] = []
        for entry in raw:
            # Some models wrap each claim as {"claim": "..."} or {"text": "..."}
            if isinstance(entry, dict):
                entry = entry.get("claim") or entry.get("text")
            if isinstance(entry, str) and entry.strip():
                claims.append(entry.strip())
        return claims
