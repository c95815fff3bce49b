"""Prompt templates for the corroboration pipeline.

Every prompt asks for a single JSON object so the completion services can run in
JSON mode. Templates use str.format placeholders; literal braces are doubled.
"""

CLAIM_EXTRACTION_SYSTEM_PROMPT = (
    "Extract short, objective, checkable factual claims. "
    "Each claim must be self-contained and verifiable on its own."
)

CLAIM_EXTRACTION_USER_PROMPT = """Extract up to {max_claims} checkable factual claims from the text below.
Ignore opinions, predictions and rhetorical questions.
Respond with JSON: {{"claims": ["...", "..."]}}
Text:
\"\"\"{text}\"\"\""""

STANCE_SYSTEM_PROMPT = "You are a fact-checker comparing news links against a single claim."

STANCE_USER_PROMPT = """Mark only the links that really address the SAME claim below
and say whether each one CORROBORATES (confirms) or CONTRADICTS (debunks) it.
Leave out links that are off-topic.

Claim:
"{claim}"

Links:
{evidence}

Respond with JSON:
{{"keep": [{{"idx": <link number>, "stance": "corroborates" | "contradicts", "reason": "<short justification>"}}]}}"""

EVIDENCE_LINE_TEMPLATE = "[{index}] {title} — {url}\n{snippet}"

BASE_CLASSIFICATION_SYSTEM_PROMPT = (
    'Classify a news page as "fake", "doubtful" or "trustworthy".'
)

BASE_CLASSIFICATION_USER_PROMPT = """Consider writing style, presence of sources, sensationalist tone, logical contradictions, etc.
Quick heuristics: {heuristics}
Respond with JSON: {{"label": "fake|doubtful|trustworthy", "score": <0..1>, "reasons": ["..."]}}
TEXT:
\"\"\"{text}\"\"\""""
