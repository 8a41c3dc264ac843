import copy
from collections.abc import Sequence

from resume_review.ats.catalog import AtsCatalog
from resume_review.config.settings import Settings
from resume_review.logging.logger import Log
from resume_review.notifications.base import BaseNotificationSink
from resume_review.notifications.messages import (
    format_changed_event,
    review_started_event,
    stage_event,
    version_created_event,
)
from resume_review.notifications.models import EventKind, NotificationEvent
from resume_review.notifications.sinks import LoggingNotificationSink
from resume_review.orchestrator.formats import FORMAT_DETAILS, ResumeFormat, recommend_format
from resume_review.review.engine import ReviewStageEngine
from resume_review.review.exceptions import (
    AnalyzerNetworkError,
    MalformedAnalyzerResponseError,
    ReviewNotStartedError,
)
from resume_review.review.factory import AnalyzerFactory
from resume_review.review.models import ReviewResult
from resume_review.review.stages import ReviewStage
from resume_review.versioning.models import Diff, ImprovementMetrics, Version, VersionHistoryEntry
from resume_review.versioning.store import DocumentVersionStore


class ReviewOrchestrator:
    """Runs one review session at a time and commits its outcome as a version.

    Session: start_review -> advance (per stage) -> commit on final stage.
    Notifications are observational; a failing sink never stops the review.
    """

    def __init__(
        self,
        engine: ReviewStageEngine,
        store: DocumentVersionStore,
        sink: BaseNotificationSink | None = None,
        ats_catalog: AtsCatalog | None = None,
        ats_target_limit: int | None = None,
        resume_format: ResumeFormat = ResumeFormat.STANDARD,
    ) -> None:
        self._engine = engine
        self._store = store
        self._sink = sink
        self._ats_catalog = ats_catalog if ats_catalog is not None else AtsCatalog()
        self._ats_target_limit = ats_target_limit
        self._format = resume_format

        self._document_id: str | None = None
        self._content = ""
        self._target_description = ""
        self._domain_tag = ""
        self._target_ats_ids: list[str] = []
        self._results: ReviewResult | None = None

    @property
    def store(self) -> DocumentVersionStore:
        return self._store

    @property
    def document_id(self) -> str | None:
        return self._document_id

    @property
    def result(self) -> ReviewResult:
        """Snapshot of the current session's accumulated results."""
        return copy.deepcopy(self._require_session())

    @property
    def target_ats_systems(self) -> list[str]:
        return list(self._target_ats_ids)

    def set_target_ats_systems(self, system_ids: Sequence[str]) -> None:
        """Replace the ATS systems the remaining stages optimize for.

        Raises:
            ReviewNotStartedError: if no session was started.
            ValueError: if an id is not in the catalog.
        """
        self._require_session()
        unknown = [i for i in system_ids if self._ats_catalog.get(i) is None]
        if unknown:
            raise ValueError(f"Unknown ATS systems: {', '.join(unknown)}")
        self._target_ats_ids = list(dict.fromkeys(system_ids))
        Log.info(f"Target ATS systems set to {self._target_ats_ids}")

    @property
    def format(self) -> ResumeFormat:
        return self._format

    def set_format(self, resume_format: ResumeFormat | str) -> None:
        """Select the resume format recorded on committed versions.

        Raises:
            ValueError: if the format is unknown.
        """
        self._format = ResumeFormat(resume_format)
        self._emit(format_changed_event(FORMAT_DETAILS[self._format].name))

    def recommend_format(self, target_description: str) -> ResumeFormat:
        return recommend_format(target_description)

    def start_review(
        self,
        document_id: str,
        content: str,
        target_description: str,
        domain_tag: str,
    ) -> str:
        """Open a review session and snapshot the submitted content as a version."""
        self._document_id = document_id
        self._content = content
        self._target_description = target_description
        self._domain_tag = domain_tag
        self._target_ats_ids = [
            system.id
            for system in self._ats_catalog.for_target_description(
                target_description, limit=self._ats_target_limit
            )
        ]
        self._results = ReviewResult()

        Log.info(f"Starting review for document {document_id} ({domain_tag})")
        self._emit(review_started_event(document_id))

        version_id = self._store.create_version(
            document_id,
            content,
            target_description=target_description,
            metadata={
                "stage": "initial",
                "domain_tag": domain_tag,
                "format": self._format.value,
                "target_ats_systems": list(self._target_ats_ids),
            },
        )
        self._emit(version_created_event(version_id))
        return version_id

    def advance(self, stage: ReviewStage | None = None) -> ReviewResult:
        """Run the next pending stage.

        `stage` may name the stage explicitly; it must be the next pending one.
        After FINAL_INTEGRATION succeeds the optimized document is committed as
        a new version carrying the full review result.

        Raises:
            ReviewNotStartedError: if no session was started.
            OutOfOrderStageError: if `stage` is not the next pending stage.
            MalformedAnalyzerResponseError: if the analyzer output is unusable.
        """
        results = self._require_session()
        stage = stage if stage is not None else results.current_stage
        self._engine.check_order(stage, results)

        self._emit(stage_event(stage, EventKind.STARTED))
        # The session adopts the stage outcome only once the commit, if any, succeeded.
        working = copy.deepcopy(results)
        try:
            self._engine.run_stage(
                stage,
                self._content,
                self._target_description,
                self._domain_tag,
                working,
                target_systems=self._target_ats_names(),
            )
            if stage is ReviewStage.FINAL_INTEGRATION:
                self._commit(working)
        except Exception as exc:
            Log.error(f"Review stage {stage.display_name} failed: {exc}")
            self._emit(stage_event(stage, EventKind.ERROR, _user_message(exc)))
            raise

        self._results = working
        self._emit(stage_event(stage, EventKind.COMPLETED))
        return copy.deepcopy(working)

    def run_to_completion(self) -> ReviewResult:
        """Advance until the review is DONE, propagating the first failure."""
        while self._require_session().current_stage is not ReviewStage.DONE:
            self.advance()
        return self.result

    def get_current_version(self) -> Version | None:
        if self._document_id is None:
            return None
        return self._store.get_current_version(self._document_id)

    def get_version_history(self) -> list[VersionHistoryEntry]:
        if self._document_id is None:
            return []
        return self._store.get_version_history(self._document_id)

    def get_improvement_metrics(self) -> ImprovementMetrics:
        if self._document_id is None:
            return ImprovementMetrics()
        return self._store.get_improvement_metrics(self._document_id)

    def compare_versions(self, from_version_id: str, to_version_id: str) -> Diff | None:
        return self._store.compare_versions(from_version_id, to_version_id)

    def _commit(self, results: ReviewResult) -> None:
        if self._document_id is None or results.optimized_document is None:
            raise ReviewNotStartedError("No optimized document to commit")
        version_id = self._store.create_version(
            self._document_id,
            results.optimized_document,
            review_result=results,
            target_description=self._target_description,
            metadata={
                "stage": "optimized",
                "domain_tag": self._domain_tag,
                "format": self._format.value,
                "target_ats_systems": list(self._target_ats_ids),
            },
        )
        Log.info(
            f"Committed optimized version {version_id} "
            f"(overall score {results.overall_score:g})"
        )
        self._emit(version_created_event(version_id))

    def _target_ats_names(self) -> list[str]:
        names = []
        for system_id in self._target_ats_ids:
            system = self._ats_catalog.get(system_id)
            if system is not None:
                names.append(system.name)
        return names

    def _require_session(self) -> ReviewResult:
        if self._results is None:
            raise ReviewNotStartedError("Review process not started")
        return self._results

    def _emit(self, event: NotificationEvent) -> None:
        if self._sink is None:
            return
        try:
            self._sink.notify(event)
        except Exception as exc:
            Log.warning(f"Notification sink failed for {event.stage} {event.kind.value}: {exc}")


def _user_message(exc: Exception) -> str:
    if isinstance(exc, MalformedAnalyzerResponseError):
        return "The AI response could not be understood. Please try again."
    if isinstance(exc, AnalyzerNetworkError):
        return "There was an error communicating with the AI service. Please try again."
    return "The review step could not be completed. Please try again."


def build_orchestrator(
    settings: Settings,
    store: DocumentVersionStore | None = None,
    sink: BaseNotificationSink | None = None,
) -> ReviewOrchestrator:
    """Build a ReviewOrchestrator with all required collaborators."""
    analyzer = AnalyzerFactory.create(settings)
    ats_catalog = AtsCatalog()
    engine = ReviewStageEngine(
        analyzer,
        ats_catalog=ats_catalog,
        ats_target_limit=settings.ats_target_limit,
    )
    return ReviewOrchestrator(
        engine=engine,
        store=store if store is not None else DocumentVersionStore(),
        sink=sink if sink is not None else LoggingNotificationSink(),
        ats_catalog=ats_catalog,
        ats_target_limit=settings.ats_target_limit,
        resume_format=ResumeFormat(settings.resume_format),
    )
