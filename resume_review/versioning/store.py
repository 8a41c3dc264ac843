"""In-memory, append-only version history for reviewed documents.

Lookups for unknown ids return None (or an empty value) instead of raising:
"no such version" is a normal outcome for callers polling state.

Readers get detached copies; nothing a caller does to a returned object
reaches the stored history.

The store does not arbitrate concurrent writers. Callers must ensure at most
one writer per document_id at a time.
"""

import copy
import dataclasses
import threading
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from types import MappingProxyType

from resume_review.logging.logger import Log
from resume_review.review.models import ReviewResult
from resume_review.sections.differ import diff
from resume_review.sections.segmenter import segment
from resume_review.versioning.models import (
    Diff,
    Document,
    ImprovementMetrics,
    Version,
    VersionHistoryEntry,
    VersionImprovement,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentVersionStore:
    """Owns the ordered version history of every document it has seen."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock if clock is not None else _utc_now
        self._versions: dict[str, Version] = {}
        self._histories: dict[str, list[str]] = {}
        self._documents: dict[str, Document] = {}
        self._sequence = 0
        self._last_created_at: datetime | None = None
        self._id_lock = threading.Lock()

    def create_version(
        self,
        document_id: str,
        content: str,
        review_result: ReviewResult | None = None,
        target_description: str | None = None,
        metadata: Mapping[str, object] | None = None,
    ) -> str:
        """Snapshot `content` as the new current version of a document.

        Changes against the previous current version are attached for audit;
        the first version of a document carries no changes.
        """
        with self._id_lock:
            created_at = self._next_timestamp()
            self._sequence += 1
            sequence = self._sequence
        version_id = f"{document_id}-{int(created_at.timestamp() * 1000)}-{sequence}"

        changes = None
        document = self._documents.get(document_id)
        previous = self._versions[document.current_version_id] if document is not None else None
        if previous is not None:
            changes = tuple(diff(previous.sections, segment(content)))

        review_snapshot = copy.deepcopy(review_result) if review_result is not None else None
        version = Version(
            version_id=version_id,
            document_id=document_id,
            content=content,
            created_at=created_at,
            target_description=target_description,
            review_result=review_snapshot,
            score=review_snapshot.overall_score if review_snapshot is not None else None,
            metadata=MappingProxyType(copy.deepcopy(dict(metadata or {}))),
            changes=changes,
        )

        self._versions[version_id] = version
        self._histories.setdefault(document_id, []).append(version_id)
        if document is None:
            self._documents[document_id] = Document(document_id, version_id)
        else:
            document.current_version_id = version_id

        Log.info(
            f"Created version {version_id} for document {document_id}: "
            f"{len(changes or ())} section changes"
        )
        return version_id

    def get_version(self, version_id: str) -> Version | None:
        version = self._versions.get(version_id)
        return _detached(version) if version is not None else None

    def get_document(self, document_id: str) -> Document | None:
        document = self._documents.get(document_id)
        return dataclasses.replace(document) if document is not None else None

    def get_current_version(self, document_id: str) -> Version | None:
        document = self._documents.get(document_id)
        if document is None:
            return None
        return _detached(self._versions[document.current_version_id])

    def get_all_versions(self, document_id: str) -> list[Version]:
        """Return every version of a document, newest first."""
        return [_detached(version) for version in self._newest_first(document_id)]

    def compare_versions(self, from_version_id: str, to_version_id: str) -> Diff | None:
        """Diff two versions by re-segmenting their content.

        Returns None if either version is unknown.
        """
        from_version = self._versions.get(from_version_id)
        to_version = self._versions.get(to_version_id)
        if from_version is None or to_version is None:
            return None

        score_delta = None
        if from_version.score is not None and to_version.score is not None:
            score_delta = to_version.score - from_version.score

        return Diff(
            from_version_id=from_version_id,
            to_version_id=to_version_id,
            changes=diff(from_version.sections, to_version.sections),
            score_delta=score_delta,
        )

    def get_version_history(self, document_id: str) -> list[VersionHistoryEntry]:
        return [
            VersionHistoryEntry(
                version_id=version.version_id,
                created_at=version.created_at,
                score=version.score,
                target_description=version.target_description,
            )
            for version in self._newest_first(document_id)
        ]

    def get_improvement_metrics(self, document_id: str) -> ImprovementMetrics:
        """Score improvement of each version over its immediate predecessor.

        `overall_improvement` is the newest score minus the oldest score, when
        both exist.
        """
        versions = self._newest_first(document_id)
        if len(versions) < 2:
            return ImprovementMetrics()

        improvements: list[VersionImprovement] = []
        for current, previous in zip(versions, versions[1:]):
            if current.score is None or previous.score is None:
                continue
            improvements.append(
                VersionImprovement(
                    version_id=current.version_id,
                    improvement=current.score - previous.score,
                    created_at=current.created_at,
                )
            )

        newest, oldest = versions[0], versions[-1]
        overall = 0.0
        if newest.score is not None and oldest.score is not None:
            overall = newest.score - oldest.score

        return ImprovementMetrics(
            overall_improvement=overall,
            version_improvements=improvements,
        )

    def _newest_first(self, document_id: str) -> list[Version]:
        history = self._histories.get(document_id, [])
        versions = [self._versions[version_id] for version_id in history]
        return sorted(versions, key=lambda v: v.created_at, reverse=True)

    def _next_timestamp(self) -> datetime:
        """Return a creation instant strictly later than the previous one."""
        now = self._clock()
        if self._last_created_at is not None and now <= self._last_created_at:
            now = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = now
        return now


def _detached(version: Version) -> Version:
    """Copy of a stored version whose mutable parts are not shared with the store."""
    return dataclasses.replace(
        version,
        review_result=copy.deepcopy(version.review_result),
        metadata=MappingProxyType(copy.deepcopy(dict(version.metadata))),
    )
