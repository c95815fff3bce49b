"""Corroboration domain schemas.

Defines the page input, evidence, verdict and result structures shared by every
pipeline stage. All models are pydantic v2 and serialize to the JSON result
contract via model_dump(mode="json").

Invariants enforced here:
- Scores are always within [0, 1]
- Labels are one of fake / doubtful / trustworthy
- A claim verdict carries at most MAX_SOURCES_PER_CLAIM sources
"""

from enum import Enum
from typing import Optional

from dateutil import parser as dateutil_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_SOURCES_PER_CLAIM = 6


class Label(str, Enum):
    """Reliability label assigned to a page by the base classification."""

    FAKE = "fake"
    DOUBTFUL = "doubtful"
    TRUSTWORTHY = "trustworthy"

    @property
    def is_suspect(self) -> bool:
        """True for labels that bias the pipeline toward debunking evidence."""
        return self in (Label.FAKE, Label.DOUBTFUL)


class Stance(str, Enum):
    """Stance of one evidence item toward one claim."""

    CORROBORATES = "corroborates"
    CONTRADICTS = "contradicts"


class CorroborationStatus(str, Enum):
    """Outcome for a single claim, or for the whole page."""

    CORROBORATED = "corroborated"
    CONTRADICTED = "contradicted"
    INCONCLUSIVE = "inconclusive"


class Page(BaseModel):
    """Page under analysis. Immutable for the duration of a request."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Page title")
    text: str = Field(..., description="Visible page text (already truncated by the caller)")
    url: Optional[str] = Field(default=None, description="Page URL")
    domain: Optional[str] = Field(default=None, description="Page hostname")
    author: Optional[str] = Field(default=None, description="Byline, if any")
    published_time: Optional[str] = Field(
        default=None,
        description="Publication timestamp as found on the page (ISO 8601 preferred)",
    )

    @field_validator("title", mode="before")
    @classmethod
    def _none_title(cls, value):
        return value or ""

    @property
    def publication_year(self) -> str:
        """Year of published_time, or empty string when it has none.

        ISO timestamps are read directly; other formats go through dateutil.
        A year filled in by the parser but absent from the text is ignored.
        """
        stamp = (self.published_time or "").strip()
        if len(stamp) >= 4 and stamp[:4].isdigit():
            return stamp[:4]
        try:
            year = str(dateutil_parser.parse(stamp).year)
        except (ValueError, OverflowError):
            return ""
        return year if year in stamp else ""


class EvidenceItem(BaseModel):
    """Single search result considered as evidence for a claim."""

    title: str = Field(default="", description="Result title")
    url: str = Field(..., description="Result URL")
    snippet: str = Field(default="", description="Result snippet")

    @field_validator("title", "snippet", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or ""


class StanceVerdict(EvidenceItem):
    """Evidence item kept by the stance classifier, with its stance."""

    stance: Stance = Field(..., description="corroborates or contradicts")
    reason: str = Field(default="", description="Short justification from the model")

    @field_validator("reason", mode="before")
    @classmethod
    def _none_reason(cls, value):
        return value or ""


class SourceRef(BaseModel):
    """Title/URL pair surfaced to the user as a suggested source."""

    title: str = ""
    url: str


class ClaimVerdict(BaseModel):
    """Corroboration outcome for one claim."""

    claim: str
    status: CorroborationStatus
    sources: list[StanceVerdict] = Field(
        default_factory=list,
        max_length=MAX_SOURCES_PER_CLAIM,
        description="Trusted evidence of the winning stance",
    )


class CorroborationResult(BaseModel):
    """Corroboration outcome across all claims of a page."""

    overall: CorroborationStatus = CorroborationStatus.INCONCLUSIVE
    verdicts: list[ClaimVerdict] = Field(default_factory=list)
    suggested_sources: list[SourceRef] = Field(default_factory=list)

    @classmethod
    def inconclusive(cls) -> "CorroborationResult":
        """Fallback result used whenever corroboration cannot complete."""
        return cls()

    @property
    def summary(self) -> str:
        return f"Search {self.overall.value}."


class BaseClassification(BaseModel):
    """Content-only classification that calibration starts from."""

    label: Label
    score: float = Field(..., ge=0.0, le=1.0)
    reasons: list[str] = Field(default_factory=list)


class QuickHeuristics(BaseModel):
    """Cheap lexical signals passed to the base classifier."""

    exclam: int = 0
    allcaps: int = 0
    clickbait: bool = False
    has_sources: bool = False


class ClassifyRequest(BaseModel):
    """A classification request as received from the transport layer."""

    page: Page
    web_search: bool = True
    max_claims: int = Field(default=2, ge=1)
    max_results: int = Field(default=6, ge=1)


class CorroborationSummary(BaseModel):
    overall: CorroborationStatus
    summary: str
    verdicts: list[ClaimVerdict] = Field(default_factory=list)


class ResultChecks(BaseModel):
    quick_heuristics: QuickHeuristics


class FinalResult(BaseModel):
    """Output contract of a classification request."""

    label: Label
    score: float = Field(..., ge=0.0, le=1.0)
    reasons: list[str] = Field(default_factory=list)
    checks: ResultChecks
    suggested_sources: list[SourceRef] = Field(default_factory=list)
    corroboration: CorroborationSummary
