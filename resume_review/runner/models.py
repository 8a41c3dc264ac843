from dataclasses import dataclass

from resume_review.review.models import ReviewResult


@dataclass(frozen=True)
class ReviewRequest:
    """Input of one review run."""

    document_id: str
    content: str
    target_description: str
    domain_tag: str


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of one review run, successful or not."""

    document_id: str
    initial_version_id: str | None
    attempts: int
    result: ReviewResult | None = None
    committed_version_id: str | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_message is None
