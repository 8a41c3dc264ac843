from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from resume_review.review.models import ReviewResult
from resume_review.sections.segmenter import segment


class ChangeKind(str, Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    MODIFICATION = "modification"


@dataclass(frozen=True)
class Change:
    """One section-level entry of a diff."""

    kind: ChangeKind
    section_name: str
    description: str
    before: str | None = None
    after: str | None = None


@dataclass(frozen=True)
class Diff:
    """Section-level comparison of two versions."""

    from_version_id: str
    to_version_id: str
    changes: list[Change] = field(default_factory=list)
    score_delta: float | None = None


@dataclass
class Document:
    """A review subject; `current_version_id` moves on every commit."""

    document_id: str
    current_version_id: str


@dataclass(frozen=True)
class Version:
    """Immutable snapshot of a document.

    `sections` is derived from `content` on every access so it can never
    drift from the stored text.
    """

    version_id: str
    document_id: str
    content: str
    created_at: datetime
    target_description: str | None = None
    review_result: ReviewResult | None = None
    score: float | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)
    changes: tuple[Change, ...] | None = None

    @property
    def sections(self) -> dict[str, str]:
        return segment(self.content)


@dataclass(frozen=True)
class VersionHistoryEntry:
    """Lightweight projection of a version for listings."""

    version_id: str
    created_at: datetime
    score: float | None = None
    target_description: str | None = None


@dataclass(frozen=True)
class VersionImprovement:
    """Score change of a version relative to its immediate predecessor."""

    version_id: str
    improvement: float
    created_at: datetime


@dataclass(frozen=True)
class ImprovementMetrics:
    overall_improvement: float = 0.0
    version_improvements: list[VersionImprovement] = field(default_factory=list)
