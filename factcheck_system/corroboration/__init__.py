"""Claim corroboration stages.

Core workflow per request:
1. ClaimExtractor pulls up to N checkable claims from the page
2. EvidenceSearcher runs label-aware query variants against one search provider
3. DomainTrustRegistry drops evidence from untrusted hosts (hard gate)
4. StanceClassifier keeps on-topic evidence and labels its stance
5. VerdictAggregator decides each claim, then the page
6. ScoreCalibrator bounds the base score by the corroboration outcome

The orchestrator sequencing these lives in factcheck_system.pipeline.
"""

from factcheck_system.corroboration.base_classifier import BaseClassifier, quick_heuristics
from factcheck_system.corroboration.claim_extractor import ClaimExtractor
from factcheck_system.corroboration.evidence_searcher import EvidenceSearcher
from factcheck_system.corroboration.query_generator import QueryGenerator
from factcheck_system.corroboration.schemas import (
    BaseClassification,
    ClaimVerdict,
    ClassifyRequest,
    CorroborationResult,
    CorroborationStatus,
    EvidenceItem,
    FinalResult,
    Label,
    Page,
    SourceRef,
    Stance,
    StanceVerdict,
)
from factcheck_system.corroboration.score_calibrator import ScoreCalibrator, calibrate
from factcheck_system.corroboration.stages import StageFailure, StageResult
from factcheck_system.corroboration.stance_classifier import StanceClassifier
from factcheck_system.corroboration.trust_registry import DomainTrustRegistry
from factcheck_system.corroboration.verdict_aggregator import VerdictAggregator

__all__ = [
    "BaseClassification",
    "BaseClassifier",
    "ClaimExtractor",
    "ClaimVerdict",
    "ClassifyRequest",
    "CorroborationResult",
    "CorroborationStatus",
    "DomainTrustRegistry",
    "EvidenceItem",
    "EvidenceSearcher",
    "FinalResult",
    "Label",
    "Page",
    "QueryGenerator",
    "ScoreCalibrator",
    "SourceRef",
    "Stance",
    "StanceClassifier",
    "StanceVerdict",
    "StageFailure",
    "StageResult",
    "VerdictAggregator",
    "calibrate",
    "quick_heuristics",
]
