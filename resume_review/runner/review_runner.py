import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from resume_review.logging.logger import Log
from resume_review.orchestrator.orchestrator import ReviewOrchestrator
from resume_review.review.exceptions import AnalyzerNetworkError, MalformedAnalyzerResponseError
from resume_review.review.stages import ReviewStage
from resume_review.runner.models import ReviewOutcome, ReviewRequest


@dataclass
class _DocumentLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    MalformedAnalyzerResponseError,
    AnalyzerNetworkError,
)


class ReviewRunner:
    """Run one review, serialize writers per document, and apply retry logic.

    A failed stage leaves the session unchanged, so the same stage is simply
    advanced again, up to `max_attempts` times per stage.
    """

    def __init__(
        self,
        orchestrator_factory: Callable[[], ReviewOrchestrator],
        max_attempts: int,
    ) -> None:
        self._orchestrator_factory = orchestrator_factory
        self._max_attempts = max(1, max_attempts)
        self._locks: dict[str, _DocumentLock] = {}
        self._locks_guard = threading.Lock()

    def run(self, request: ReviewRequest) -> ReviewOutcome:
        """Execute a full review with error handling."""
        with self._document_lock(request.document_id):
            return self._run_locked(request)

    def _run_locked(self, request: ReviewRequest) -> ReviewOutcome:
        orchestrator = self._orchestrator_factory()
        initial_version_id: str | None = None
        attempts = 0
        failures = 0
        try:
            initial_version_id = orchestrator.start_review(
                request.document_id,
                request.content,
                request.target_description,
                request.domain_tag,
            )
            while orchestrator.result.current_stage is not ReviewStage.DONE:
                stage = orchestrator.result.current_stage
                attempts += 1
                try:
                    orchestrator.advance()
                    failures = 0
                except RETRYABLE_ERRORS as exc:
                    failures += 1
                    if failures >= self._max_attempts:
                        Log.error(
                            f"Stage {stage.display_name} permanently failed "
                            f"after {failures} attempts"
                        )
                        raise
                    Log.warning(
                        f"Stage {stage.display_name} will be retried "
                        f"(attempt {failures + 1}): {exc}"
                    )
        except Exception as exc:
            Log.error(f"Review of document {request.document_id} failed: {exc}")
            return ReviewOutcome(
                document_id=request.document_id,
                initial_version_id=initial_version_id,
                attempts=attempts,
                result=orchestrator.result if initial_version_id is not None else None,
                error_message=str(exc),
            )

        current = orchestrator.get_current_version()
        Log.info(f"Review of document {request.document_id} completed successfully")
        return ReviewOutcome(
            document_id=request.document_id,
            initial_version_id=initial_version_id,
            attempts=attempts,
            result=orchestrator.result,
            committed_version_id=current.version_id if current is not None else None,
        )

    @contextmanager
    def _document_lock(self, document_id: str) -> Iterator[None]:
        """Hold the document's lock; the entry is dropped once nobody uses it."""
        with self._locks_guard:
            entry = self._locks.setdefault(document_id, _DocumentLock())
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[document_id]
