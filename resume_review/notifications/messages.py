"""User-facing titles and messages for pipeline notifications."""

from resume_review.notifications.models import EventKind, NotificationEvent
from resume_review.review.stages import ReviewStage

REVIEW_STAGE = "review"
VERSION_CONTROL_STAGE = "version-control"
FORMAT_STAGE = "format-selection"

_STAGE_MESSAGES: dict[tuple[ReviewStage, EventKind], str] = {
    (ReviewStage.INITIAL_ANALYSIS, EventKind.STARTED):
        "Analyzing your resume format, content, achievements, and keywords...",
    (ReviewStage.INITIAL_ANALYSIS, EventKind.COMPLETED):
        "Initial analysis of your resume is complete. Moving to technical optimization...",
    (ReviewStage.TECHNICAL_OPTIMIZATION, EventKind.STARTED):
        "Optimizing technical aspects of your resume for your industry...",
    (ReviewStage.TECHNICAL_OPTIMIZATION, EventKind.COMPLETED):
        "Technical optimization is complete. Moving to ATS optimization...",
    (ReviewStage.ATS_OPTIMIZATION, EventKind.STARTED):
        "Optimizing your resume for Applicant Tracking Systems...",
    (ReviewStage.ATS_OPTIMIZATION, EventKind.COMPLETED):
        "ATS optimization is complete. Moving to executive impact enhancement...",
    (ReviewStage.EXECUTIVE_IMPACT, EventKind.STARTED):
        "Enhancing the executive impact of your resume...",
    (ReviewStage.EXECUTIVE_IMPACT, EventKind.COMPLETED):
        "Executive impact enhancement is complete. Moving to final integration...",
    (ReviewStage.FINAL_INTEGRATION, EventKind.STARTED):
        "Integrating all optimizations into your final resume...",
    (ReviewStage.FINAL_INTEGRATION, EventKind.COMPLETED):
        "Your resume has been fully optimized and is ready for review!",
}

_TITLE_SUFFIX = {
    EventKind.STARTED: "Started",
    EventKind.COMPLETED: "Completed",
    EventKind.ERROR: "Failed",
}


def stage_event(stage: ReviewStage, kind: EventKind, detail: str = "") -> NotificationEvent:
    """Build the notification for a stage transition."""
    title = f"{stage.display_name} {_TITLE_SUFFIX[kind]}"
    if kind is EventKind.ERROR:
        message = detail or "There was an error communicating with the AI service. Please try again."
    else:
        message = _STAGE_MESSAGES[(stage, kind)]
    return NotificationEvent(stage=stage.value, kind=kind, message=message, title=title)


def review_started_event(document_id: str) -> NotificationEvent:
    return NotificationEvent(
        stage=REVIEW_STAGE,
        kind=EventKind.STARTED,
        message=f"Review started for document {document_id}.",
        title="Review Started",
    )


def version_created_event(version_id: str) -> NotificationEvent:
    return NotificationEvent(
        stage=VERSION_CONTROL_STAGE,
        kind=EventKind.COMPLETED,
        message=f"A new version of your resume has been created ({version_id}).",
        title="New Version Created",
    )


def format_changed_event(format_name: str) -> NotificationEvent:
    return NotificationEvent(
        stage=FORMAT_STAGE,
        kind=EventKind.COMPLETED,
        message=f"Your resume format has been updated to {format_name}.",
        title="Resume Format Changed",
    )
