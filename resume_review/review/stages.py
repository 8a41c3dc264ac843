from dataclasses import dataclass
from enum import Enum


class ReviewStage(str, Enum):
    """Review pipeline states in their fixed, linear order."""

    INITIAL_ANALYSIS = "initial_analysis"
    TECHNICAL_OPTIMIZATION = "technical_optimization"
    ATS_OPTIMIZATION = "ats_optimization"
    EXECUTIVE_IMPACT = "executive_impact"
    FINAL_INTEGRATION = "final_integration"
    DONE = "done"

    @property
    def display_name(self) -> str:
        return STAGE_TITLES[self]


STAGE_ORDER: tuple[ReviewStage, ...] = (
    ReviewStage.INITIAL_ANALYSIS,
    ReviewStage.TECHNICAL_OPTIMIZATION,
    ReviewStage.ATS_OPTIMIZATION,
    ReviewStage.EXECUTIVE_IMPACT,
    ReviewStage.FINAL_INTEGRATION,
)

STAGE_TITLES: dict[ReviewStage, str] = {
    ReviewStage.INITIAL_ANALYSIS: "Initial Analysis",
    ReviewStage.TECHNICAL_OPTIMIZATION: "Technical Optimization",
    ReviewStage.ATS_OPTIMIZATION: "ATS Optimization",
    ReviewStage.EXECUTIVE_IMPACT: "Executive Impact Enhancement",
    ReviewStage.FINAL_INTEGRATION: "Final Integration",
    ReviewStage.DONE: "Done",
}


@dataclass(frozen=True)
class StageFields:
    """JSON field names an analyzer must return for one stage."""

    score_field: str
    list_fields: tuple[str, ...]


STAGE_FIELDS: dict[ReviewStage, StageFields] = {
    ReviewStage.INITIAL_ANALYSIS: StageFields(
        score_field="score",
        list_fields=(
            "format_issues",
            "content_gaps",
            "achievement_opportunities",
            "keyword_recommendations",
            "priority_improvements",
        ),
    ),
    ReviewStage.TECHNICAL_OPTIMIZATION: StageFields(
        score_field="technical_score",
        list_fields=(
            "accuracy_issues",
            "industry_alignment_gaps",
            "impact_enhancement_suggestions",
            "modernization_recommendations",
        ),
    ),
    ReviewStage.ATS_OPTIMIZATION: StageFields(
        score_field="ats_score",
        list_fields=(
            "format_fixes",
            "keyword_optimizations",
            "structure_improvements",
            "parsing_enhancements",
        ),
    ),
    ReviewStage.EXECUTIVE_IMPACT: StageFields(
        score_field="executive_score",
        list_fields=(
            "leadership_enhancements",
            "impact_amplifications",
            "presence_improvements",
            "positioning_recommendations",
        ),
    ),
    ReviewStage.FINAL_INTEGRATION: StageFields(
        score_field="final_score",
        list_fields=(
            "integrated_improvements",
            "impact_enhancements",
            "readability_optimizations",
            "final_recommendations",
        ),
    ),
}


def next_stage(stage: ReviewStage) -> ReviewStage:
    """Return the stage following `stage`; FINAL_INTEGRATION is followed by DONE."""
    if stage is ReviewStage.DONE:
        raise ValueError("DONE is terminal and has no next stage")
    index = STAGE_ORDER.index(stage)
    if index + 1 < len(STAGE_ORDER):
        return STAGE_ORDER[index + 1]
    return ReviewStage.DONE


def prerequisites(stage: ReviewStage) -> tuple[ReviewStage, ...]:
    """Return every stage that must have completed before `stage` may run."""
    if stage is ReviewStage.DONE:
        return STAGE_ORDER
    return STAGE_ORDER[: STAGE_ORDER.index(stage)]
