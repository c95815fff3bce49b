"""Prompt templates for the language-model stages.

Modules:
    corroboration_prompts: Claim extraction, stance classification and base
        classification prompts
"""

from factcheck_system.config.prompts.corroboration_prompts import (
    BASE_CLASSIFICATION_SYSTEM_PROMPT,
    BASE_CLASSIFICATION_USER_PROMPT,
    CLAIM_EXTRACTION_SYSTEM_PROMPT,
    CLAIM_EXTRACTION_USER_PROMPT,
    EVIDENCE_LINE_TEMPLATE,
    STANCE_SYSTEM_PROMPT,
    STANCE_USER_PROMPT,
)

__all__ = [
    "BASE_CLASSIFICATION_SYSTEM_PROMPT",
    "BASE_CLASSIFICATION_USER_PROMPT",
    "CLAIM_EXTRACTION_SYSTEM_PROMPT",
    "CLAIM_EXTRACTION_USER_PROMPT",
    "EVIDENCE_LINE_TEMPLATE",
    "STANCE_SYSTEM_PROMPT",
    "STANCE_USER_PROMPT",
]
