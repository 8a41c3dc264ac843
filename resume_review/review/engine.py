"""Five-stage review state machine.

INITIAL_ANALYSIS -> TECHNICAL_OPTIMIZATION -> ATS_OPTIMIZATION
-> EXECUTIVE_IMPACT -> FINAL_INTEGRATION -> DONE

Each stage hands the accumulated results of every earlier stage to the
analyzer. A stage result is recorded only after the analyzer response has
been validated, so a failed or aborted stage leaves the ReviewResult exactly
as it was and the stage can be retried.
"""

from collections.abc import Sequence

from resume_review.ats.catalog import AtsCatalog
from resume_review.logging.logger import Log
from resume_review.review.base import BaseStructuredAnalyzer
from resume_review.review.exceptions import (
    MalformedAnalyzerResponseError,
    OutOfOrderStageError,
)
from resume_review.review.models import AnalyzerResponse, ReviewResult, StageResult
from resume_review.review.stages import ReviewStage, next_stage, prerequisites
from resume_review.review.validator import validate_stage_result

_ATS_AWARE_STAGES = frozenset({ReviewStage.ATS_OPTIMIZATION, ReviewStage.FINAL_INTEGRATION})


class ReviewStageEngine:
    """Drives a document through the review stages in strict order."""

    def __init__(
        self,
        analyzer: BaseStructuredAnalyzer,
        ats_catalog: AtsCatalog | None = None,
        ats_target_limit: int | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._ats_catalog = ats_catalog
        self._ats_target_limit = ats_target_limit

    def run_stage(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        results: ReviewResult,
        target_systems: Sequence[str] | None = None,
    ) -> StageResult:
        """Run one stage and record its result in `results`.

        `target_systems` names the ATS systems the ATS and final stages
        optimize for; when omitted they are looked up in the catalog.

        Raises:
            OutOfOrderStageError: if a prerequisite result is missing or the
                stage is not the next pending one.
            MalformedAnalyzerResponseError: if the analyzer output does not
                have the stage's shape.
        """
        self.check_order(stage, results)

        Log.info(f"Running review stage: {stage.display_name}")
        response = self._analyzer.analyze(
            stage,
            document_text,
            target_description,
            domain_tag,
            results,
            target_systems=self._target_systems(stage, target_description, target_systems),
        )
        if not isinstance(response, AnalyzerResponse):
            raise MalformedAnalyzerResponseError(
                f"{stage.display_name}: analyzer returned {type(response).__name__}"
            )

        stage_result = validate_stage_result(stage, response.structured_result)
        rewritten = None
        if stage is ReviewStage.FINAL_INTEGRATION:
            rewritten = (response.rewritten_text or "").strip()
            if not rewritten:
                raise MalformedAnalyzerResponseError(
                    f"{stage.display_name}: response contains no optimized document"
                )

        setattr(results, stage.value, stage_result)
        if rewritten is not None:
            results.optimized_document = rewritten
            results.overall_score = _mean(results.stage_scores())
        results.current_stage = next_stage(stage)

        Log.info(
            f"Completed review stage: {stage.display_name} "
            f"(score {stage_result.stage_score:g})"
        )
        return stage_result

    def run_complete_review(
        self,
        document_text: str,
        target_description: str,
        domain_tag: str,
        results: ReviewResult | None = None,
        target_systems: Sequence[str] | None = None,
    ) -> ReviewResult:
        """Run every remaining stage in order, stopping at the first failure."""
        if results is None:
            results = ReviewResult()
        while results.current_stage is not ReviewStage.DONE:
            self.run_stage(
                results.current_stage,
                document_text,
                target_description,
                domain_tag,
                results,
                target_systems,
            )
        return results

    def target_systems(self, target_description: str) -> list[str]:
        """Names of the ATS systems pre-selected for a target description."""
        if self._ats_catalog is None:
            return []
        systems = self._ats_catalog.for_target_description(
            target_description, limit=self._ats_target_limit
        )
        return [system.name for system in systems]

    def _target_systems(
        self,
        stage: ReviewStage,
        target_description: str,
        selected: Sequence[str] | None,
    ) -> list[str]:
        if stage not in _ATS_AWARE_STAGES:
            return []
        if selected is not None:
            return list(selected)
        return self.target_systems(target_description)

    @staticmethod
    def check_order(stage: ReviewStage, results: ReviewResult) -> None:
        """Raise OutOfOrderStageError unless `stage` may run next."""
        if stage is ReviewStage.DONE:
            raise OutOfOrderStageError("Review is already complete; no stage left to run")
        missing = [p.display_name for p in prerequisites(stage) if results.get(p) is None]
        if missing:
            raise OutOfOrderStageError(
                f"{stage.display_name} requires completed stages: {', '.join(missing)}"
            )
        if stage is not results.current_stage:
            raise OutOfOrderStageError(
                f"{stage.display_name} cannot run; next pending stage is "
                f"{results.current_stage.display_name}"
            )


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)
