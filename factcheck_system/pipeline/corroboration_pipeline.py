"""Request pipeline: base classification, claim corroboration and calibration.

Sequence per request:
1. Validate search configuration (when web search is requested)
2. Base classification of the page text (required, the only fatal stage)
3. Corroboration, best effort:
   claims -> per claim: search -> trust gate -> stance -> verdict -> overall
4. Calibrate the base score against the corroboration outcome

Every external call has its own deadline. A failed stage is replaced by its
degraded value:

    claim extraction      -> no claims (corroboration ends inconclusive)
    evidence search       -> no evidence for that claim
    stance classification -> no stances for that claim

Anything unexpected inside corroboration is logged and downgraded to the
inconclusive fallback. ConfigurationError always propagates.

Usage:
    from factcheck_system.pipeline import CorroborationPipeline

    async with CorroborationPipeline(settings) as pipeline:
        result = await pipeline.classify(ClassifyRequest(page=page))
"""

import asyncio
from typing import Optional

import structlog

from factcheck_system.config.settings import Settings
from factcheck_system.corroboration.base_classifier import BaseClassifier, quick_heuristics
from factcheck_system.corroboration.claim_extractor import ClaimExtractor
from factcheck_system.corroboration.evidence_searcher import EvidenceSearcher
from factcheck_system.corroboration.schemas import (
    ClaimVerdict,
    ClassifyRequest,
    CorroborationResult,
    CorroborationSummary,
    FinalResult,
    Label,
    Page,
    ResultChecks,
)
from factcheck_system.corroboration.score_calibrator import ScoreCalibrator
from factcheck_system.corroboration.stages import run_with_deadline
from factcheck_system.corroboration.stance_classifier import StanceClassifier
from factcheck_system.corroboration.trust_registry import DomainTrustRegistry
from factcheck_system.corroboration.verdict_aggregator import VerdictAggregator
from factcheck_system.errors import BaseClassificationError, ConfigurationError
from factcheck_system.llm.completion import CompletionService, create_completion_service
from factcheck_system.search.providers import SearchProvider, create_search_provider
from factcheck_system.utils.logging import bind_request_context


class CorroborationPipeline:
    """Orchestrates one classification request end to end.

    Collaborators are created lazily from settings unless injected, so a
    pipeline without web search never needs search credentials.
    """

    def __init__(
        self,
        settings: Settings,
        completion: Optional[CompletionService] = None,
        search_provider: Optional[SearchProvider] = None,
        trust_registry: Optional[DomainTrustRegistry] = None,
        base_classifier: Optional[BaseClassifier] = None,
        claim_extractor: Optional[ClaimExtractor] = None,
        evidence_searcher: Optional[EvidenceSearcher] = None,
        stance_classifier: Optional[StanceClassifier] = None,
        verdict_aggregator: Optional[VerdictAggregator] = None,
        score_calibrator: Optional[ScoreCalibrator] = None,
    ) -> None:
        """Initialize CorroborationPipeline.

        Args:
            settings: Explicit configuration; stages never read globals.
            completion: Completion service. Built from settings if None.
            search_provider: Search provider. Built from settings if None.
            trust_registry: Trust registry. Defaults plus EXTRA_TRUSTED_DOMAINS if None.
            base_classifier: Base content classifier.
            claim_extractor: Claim extraction stage.
            evidence_searcher: Evidence search stage.
            stance_classifier: Stance classification stage.
            verdict_aggregator: Verdict aggregation stage.
            score_calibrator: Score calibration stage.
        """
        self.settings = settings
        self._completion = completion
        self._search_provider = search_provider
        self.trust_registry = trust_registry or DomainTrustRegistry(
            extra_domains=settings.trusted_domain_extras()
        )
        self._base_classifier = base_classifier
        self._claim_extractor = claim_extractor
        self._evidence_searcher = evidence_searcher
        self._stance_classifier = stance_classifier
        self.verdict_aggregator = verdict_aggregator or VerdictAggregator(trust_registry=self.trust_registry)
        self.score_calibrator = score_calibrator or ScoreCalibrator()
        self._logger = structlog.get_logger().bind(component="CorroborationPipeline")

    # ── Lazy collaborators ───────────────────────────────────────────

    def _get_completion(self) -> CompletionService:
        if self._completion is None:
            self._completion = create_completion_service(self.settings)
        return self._completion

    def _get_base_classifier(self) -> BaseClassifier:
        if self._base_classifier is None:
            self._base_classifier = BaseClassifier(self._get_completion())
        return self._base_classifier

    def _get_claim_extractor(self) -> ClaimExtractor:
        if self._claim_extractor is None:
            self._claim_extractor = ClaimExtractor(
                self._get_completion(),
                text_limit=self.settings.claim_text_limit,
            )
        return self._claim_extractor

    def _get_evidence_searcher(self) -> EvidenceSearcher:
        if self._evidence_searcher is None:
            if self._search_provider is None:
                self._search_provider = create_search_provider(self.settings)
            self._evidence_searcher = EvidenceSearcher(
                self._search_provider,
                search_timeout=self.settings.search_timeout,
            )
        return self._evidence_searcher

    def _get_stance_classifier(self) -> StanceClassifier:
        if self._stance_classifier is None:
            self._stance_classifier = StanceClassifier(self._get_completion())
        return self._stance_classifier

    async def aclose(self) -> None:
        if self._search_provider is not None:
            await self._search_provider.aclose()
        if self._completion is not None:
            await self._completion.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    # ── Request entry point ──────────────────────────────────────────

    async def classify(self, request: ClassifyRequest) -> FinalResult:
        """Classify a page and back the verdict with trusted evidence.

        Args:
            request: Validated request (page.text is required by the schema).

        Returns:
            FinalResult with calibrated score and corroboration details.

        Raises:
            ConfigurationError: Missing credentials or unknown providers.
            BaseClassificationError: The base classification did not complete.
        """
        request_id = bind_request_context(page_domain=request.page.domain or "")
        loop = asyncio.get_running_loop()
        started = loop.time()

        if request.web_search:
            # Fail on missing search credentials before spending a model call
            self._get_evidence_searcher()

        page = self._truncate(request.page)
        heuristics = quick_heuristics(page)

        base_result = await run_with_deadline(
            "base_classification",
            self._get_base_classifier().classify(page, heuristics),
            min(self.settings.llm_timeout, self.settings.request_timeout),
        )
        if not base_result.ok:
            self._logger.error(
                "base_classification_failed",
                request_id=request_id,
                failure=base_result.failure.value,
                detail=base_result.detail,
            )
            raise BaseClassificationError(
                f"Base classification failed ({base_result.failure.value}): {base_result.detail}"
            )
        base = base_result.value

        corroboration = CorroborationResult.inconclusive()
        if request.web_search:
            remaining = self.settings.request_timeout - (loop.time() - started)
            if remaining > 0:
                corroboration_result = await run_with_deadline(
                    "corroboration",
                    self.corroborate(page, base.label, request.max_claims, request.max_results),
                    remaining,
                )
                corroboration = corroboration_result.value_or(CorroborationResult.inconclusive())
            else:
                self._logger.warning("corroboration_skipped_no_budget", request_id=request_id)

        score = self.score_calibrator.calibrate(base.label, base.score, corroboration)

        self._logger.info(
            "request_classified",
            label=base.label.value,
            raw_score=base.score,
            score=score,
            overall=corroboration.overall.value,
            claims=len(corroboration.verdicts),
            elapsed=round(loop.time() - started, 3),
        )
        return FinalResult(
            label=base.label,
            score=score,
            reasons=base.reasons,
            checks=ResultChecks(quick_heuristics=heuristics),
            suggested_sources=corroboration.suggested_sources,
            corroboration=CorroborationSummary(
                overall=corroboration.overall,
                summary=corroboration.summary,
                verdicts=corroboration.verdicts,
            ),
        )

    def _truncate(self, page: Page) -> Page:
        limit = self.settings.page_text_limit
        if len(page.text) <= limit:
            return page
        return page.model_copy(update={"text": page.text[:limit]})

    # ── Corroboration ────────────────────────────────────────────────

    async def corroborate(
        self,
        page: Page,
        label: Label,
        max_claims: Optional[int] = None,
        max_results: Optional[int] = None,
    ) -> CorroborationResult:
        """Best-effort corroboration of page claims against trusted sources.

        Never raises except ConfigurationError; every other failure yields the
        inconclusive fallback.
        """
        max_claims = max_claims or self.settings.max_claims
        max_results = max_results or self.settings.max_results
        try:
            return await self._corroborate(page, Label(label), max_claims, max_results)
        except ConfigurationError:
            raise
        except Exception as e:
            self._logger.error("corroboration_failed", error=str(e), error_type=type(e).__name__)
            return CorroborationResult.inconclusive()

    async def _corroborate(
        self,
        page: Page,
        label: Label,
        max_claims: int,
        max_results: int,
    ) -> CorroborationResult:
        claims_result = await run_with_deadline(
            "claim_extraction",
            self._get_claim_extractor().extract_claims(page, max_claims),
            self.settings.llm_timeout,
        )
        claims = claims_result.value_or([])
        if not claims:
            self._logger.info(
                "no_claims_extracted",
                failure=claims_result.failure.value if claims_result.failure else None,
            )
            return CorroborationResult.inconclusive()

        verdicts: list[ClaimVerdict] = []
        for claim in claims:
            verdicts.append(await self._corroborate_claim(claim, label, page, max_results))

        return self.verdict_aggregator.combine(verdicts)

    async def _corroborate_claim(
        self,
        claim: str,
        label: Label,
        page: Page,
        max_results: int,
    ) -> ClaimVerdict:
        search_result = await self._get_evidence_searcher().search(claim, label, page, max_results)
        candidates = search_result.value_or([])
        trusted = self.trust_registry.filter_trusted(candidates)

        stance_result = await run_with_deadline(
            "stance_classification",
            self._get_stance_classifier().classify_stance(claim, trusted),
            self.settings.llm_timeout,
        )
        stances = stance_result.value_or([])

        self._logger.debug(
            "claim_evidence",
            claim=claim[:80],
            candidates=len(candidates),
            trusted=len(trusted),
            kept=len(stances),
        )
        return self.verdict_aggregator.aggregate(claim, stances, label)
