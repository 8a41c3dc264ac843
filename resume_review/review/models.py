from dataclasses import asdict, dataclass, field

from resume_review.review.stages import STAGE_ORDER, ReviewStage


@dataclass(frozen=True)
class InitialAnalysisResult:
    """Format, content, achievement and keyword analysis."""

    score: float
    format_issues: list[str] = field(default_factory=list)
    content_gaps: list[str] = field(default_factory=list)
    achievement_opportunities: list[str] = field(default_factory=list)
    keyword_recommendations: list[str] = field(default_factory=list)
    priority_improvements: list[str] = field(default_factory=list)

    @property
    def stage_score(self) -> float:
        return self.score


@dataclass(frozen=True)
class TechnicalOptimizationResult:
    """Technical accuracy and industry alignment review."""

    technical_score: float
    accuracy_issues: list[str] = field(default_factory=list)
    industry_alignment_gaps: list[str] = field(default_factory=list)
    impact_enhancement_suggestions: list[str] = field(default_factory=list)
    modernization_recommendations: list[str] = field(default_factory=list)

    @property
    def stage_score(self) -> float:
        return self.technical_score


@dataclass(frozen=True)
class AtsOptimizationResult:
    """Applicant Tracking System compatibility review."""

    ats_score: float
    format_fixes: list[str] = field(default_factory=list)
    keyword_optimizations: list[str] = field(default_factory=list)
    structure_improvements: list[str] = field(default_factory=list)
    parsing_enhancements: list[str] = field(default_factory=list)

    @property
    def stage_score(self) -> float:
        return self.ats_score


@dataclass(frozen=True)
class ExecutiveImpactResult:
    """Leadership narrative and business impact review."""

    executive_score: float
    leadership_enhancements: list[str] = field(default_factory=list)
    impact_amplifications: list[str] = field(default_factory=list)
    presence_improvements: list[str] = field(default_factory=list)
    positioning_recommendations: list[str] = field(default_factory=list)

    @property
    def stage_score(self) -> float:
        return self.executive_score


@dataclass(frozen=True)
class FinalIntegrationResult:
    """Integration of every prior stage into the rewritten document."""

    final_score: float
    integrated_improvements: list[str] = field(default_factory=list)
    impact_enhancements: list[str] = field(default_factory=list)
    readability_optimizations: list[str] = field(default_factory=list)
    final_recommendations: list[str] = field(default_factory=list)

    @property
    def stage_score(self) -> float:
        return self.final_score


StageResult = (
    InitialAnalysisResult
    | TechnicalOptimizationResult
    | AtsOptimizationResult
    | ExecutiveImpactResult
    | FinalIntegrationResult
)

STAGE_RESULT_TYPES: dict[ReviewStage, type[StageResult]] = {
    ReviewStage.INITIAL_ANALYSIS: InitialAnalysisResult,
    ReviewStage.TECHNICAL_OPTIMIZATION: TechnicalOptimizationResult,
    ReviewStage.ATS_OPTIMIZATION: AtsOptimizationResult,
    ReviewStage.EXECUTIVE_IMPACT: ExecutiveImpactResult,
    ReviewStage.FINAL_INTEGRATION: FinalIntegrationResult,
}


@dataclass
class ReviewResult:
    """Accumulates one result per executed stage.

    A stage field is populated only when every earlier stage field is.
    `current_stage` names the next stage to run, or DONE.
    """

    initial_analysis: InitialAnalysisResult | None = None
    technical_optimization: TechnicalOptimizationResult | None = None
    ats_optimization: AtsOptimizationResult | None = None
    executive_impact: ExecutiveImpactResult | None = None
    final_integration: FinalIntegrationResult | None = None
    current_stage: ReviewStage = ReviewStage.INITIAL_ANALYSIS
    overall_score: float | None = None
    optimized_document: str | None = None

    def get(self, stage: ReviewStage) -> StageResult | None:
        """Return the recorded result for a stage, if any."""
        if stage is ReviewStage.DONE:
            return None
        result: StageResult | None = getattr(self, stage.value)
        return result

    def completed_stages(self) -> list[ReviewStage]:
        return [stage for stage in STAGE_ORDER if self.get(stage) is not None]

    def stage_scores(self) -> list[float]:
        """Scores of the stages that are present, in stage order."""
        scores: list[float] = []
        for stage in STAGE_ORDER:
            result = self.get(stage)
            if result is not None:
                scores.append(result.stage_score)
        return scores

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["current_stage"] = self.current_stage.value
        return payload


@dataclass(frozen=True)
class AnalyzerResponse:
    """Raw structured output of the analyzer collaborator for one stage."""

    structured_result: dict[str, object]
    rewritten_text: str | None = None
