from collections.abc import Sequence
from typing import Any
from unittest.mock import MagicMock

import pytest

from resume_review.config.settings import Settings
from resume_review.notifications.base import BaseNotificationSink
from resume_review.notifications.models import EventKind, NotificationEvent
from resume_review.notifications.sinks import CallbackNotificationSink, LoggingNotificationSink
from resume_review.orchestrator.formats import ResumeFormat
from resume_review.orchestrator.orchestrator import ReviewOrchestrator, build_orchestrator
from resume_review.review.base import BaseStructuredAnalyzer
from resume_review.review.engine import ReviewStageEngine
from resume_review.review.exceptions import (
    AnalyzerNetworkError,
    MalformedAnalyzerResponseError,
    OutOfOrderStageError,
    ReviewNotStartedError,
)
from resume_review.review.models import AnalyzerResponse, ReviewResult
from resume_review.review.stages import STAGE_FIELDS, STAGE_ORDER, ReviewStage
from resume_review.versioning.models import ChangeKind
from resume_review.versioning.store import DocumentVersionStore

_SCORES = {
    ReviewStage.INITIAL_ANALYSIS: 80,
    ReviewStage.TECHNICAL_OPTIMIZATION: 70,
    ReviewStage.ATS_OPTIMIZATION: 90,
    ReviewStage.EXECUTIVE_IMPACT: 60,
    ReviewStage.FINAL_INTEGRATION: 100,
}

_OPTIMIZED = "SUMMARY\nImproved summary\nSKILLS\nPython, Go"


class FixedAnalyzer(BaseStructuredAnalyzer):
    def analyze(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        prior_results: ReviewResult,
        target_systems: Sequence[str] = (),
    ) -> AnalyzerResponse:
        fields = STAGE_FIELDS[stage]
        payload: dict[str, Any] = {fields.score_field: _SCORES[stage]}
        for name in fields.list_fields:
            payload[name] = []
        rewritten = _OPTIMIZED if stage is ReviewStage.FINAL_INTEGRATION else None
        return AnalyzerResponse(structured_result=payload, rewritten_text=rewritten)


class RecordingAnalyzer(FixedAnalyzer):
    def __init__(self) -> None:
        self.systems: dict[ReviewStage, list[str]] = {}

    def analyze(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        prior_results: ReviewResult,
        target_systems: Sequence[str] = (),
    ) -> AnalyzerResponse:
        self.systems[stage] = list(target_systems)
        return super().analyze(
            stage, document_text, target_description, domain_tag, prior_results, target_systems
        )


class FailingCommitStore(DocumentVersionStore):
    """Rejects writes while `offline` is set."""

    offline = False

    def create_version(self, *args: Any, **kwargs: Any) -> str:
        if self.offline:
            raise RuntimeError("storage unavailable")
        return super().create_version(*args, **kwargs)


def _make_orchestrator(
    analyzer: BaseStructuredAnalyzer | None = None,
    sink: BaseNotificationSink | None = None,
    store: DocumentVersionStore | None = None,
) -> tuple[ReviewOrchestrator, list[NotificationEvent]]:
    events: list[NotificationEvent] = []
    orchestrator = ReviewOrchestrator(
        engine=ReviewStageEngine(analyzer or FixedAnalyzer()),
        store=store if store is not None else DocumentVersionStore(),
        sink=sink if sink is not None else CallbackNotificationSink(events.append),
    )
    return orchestrator, events


def _start(orchestrator: ReviewOrchestrator) -> str:
    return orchestrator.start_review(
        "doc", "SUMMARY\nOriginal summary", "Engineer role using Greenhouse", "technology"
    )


class TestStartReview:
    def test_creates_initial_version(self) -> None:
        orchestrator, _ = _make_orchestrator()
        version_id = _start(orchestrator)
        current = orchestrator.get_current_version()
        assert current is not None
        assert current.version_id == version_id
        assert current.content == "SUMMARY\nOriginal summary"
        assert current.metadata["stage"] == "initial"
        assert current.review_result is None

    def test_selects_target_ats_systems(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        assert orchestrator.target_ats_systems[0] == "greenhouse"

    def test_emits_review_started_and_version_created(self) -> None:
        orchestrator, events = _make_orchestrator()
        _start(orchestrator)
        assert [(e.stage, e.kind) for e in events] == [
            ("review", EventKind.STARTED),
            ("version-control", EventKind.COMPLETED),
        ]

    def test_restart_resets_results(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        orchestrator.advance()
        _start(orchestrator)
        assert orchestrator.result == ReviewResult()


class TestAdvance:
    def test_requires_started_session(self) -> None:
        orchestrator, _ = _make_orchestrator()
        with pytest.raises(ReviewNotStartedError):
            orchestrator.advance()
        with pytest.raises(ReviewNotStartedError):
            _ = orchestrator.result

    def test_runs_next_pending_stage(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        result = orchestrator.advance()
        assert result.initial_analysis is not None
        assert result.current_stage is ReviewStage.TECHNICAL_OPTIMIZATION

    def test_returned_result_is_a_snapshot(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        result = orchestrator.advance()
        result.current_stage = ReviewStage.DONE
        assert orchestrator.result.current_stage is ReviewStage.TECHNICAL_OPTIMIZATION

    def test_out_of_order_stage_rejected_without_events(self) -> None:
        analyzer = MagicMock(spec=BaseStructuredAnalyzer)
        orchestrator, events = _make_orchestrator(analyzer=analyzer)
        _start(orchestrator)
        events.clear()
        with pytest.raises(OutOfOrderStageError):
            orchestrator.advance(ReviewStage.TECHNICAL_OPTIMIZATION)
        analyzer.analyze.assert_not_called()
        assert events == []
        assert orchestrator.result.initial_analysis is None

    def test_stage_events(self) -> None:
        orchestrator, events = _make_orchestrator()
        _start(orchestrator)
        events.clear()
        orchestrator.advance(ReviewStage.INITIAL_ANALYSIS)
        assert [(e.stage, e.kind) for e in events] == [
            ("initial_analysis", EventKind.STARTED),
            ("initial_analysis", EventKind.COMPLETED),
        ]

    def test_failure_emits_error_and_reraises(self) -> None:
        analyzer = MagicMock(spec=BaseStructuredAnalyzer)
        analyzer.analyze.side_effect = AnalyzerNetworkError("offline")
        orchestrator, events = _make_orchestrator(analyzer=analyzer)
        _start(orchestrator)
        events.clear()
        with pytest.raises(AnalyzerNetworkError):
            orchestrator.advance()
        assert [e.kind for e in events] == [EventKind.STARTED, EventKind.ERROR]
        assert "communicating with the AI service" in events[-1].message
        assert orchestrator.result == ReviewResult()

    def test_malformed_error_message(self) -> None:
        analyzer = MagicMock(spec=BaseStructuredAnalyzer)
        analyzer.analyze.return_value = AnalyzerResponse(structured_result={})
        orchestrator, events = _make_orchestrator(analyzer=analyzer)
        _start(orchestrator)
        with pytest.raises(MalformedAnalyzerResponseError):
            orchestrator.advance()
        assert "could not be understood" in events[-1].message

    def test_failing_sink_does_not_stop_review(self) -> None:
        sink = MagicMock(spec=BaseNotificationSink)
        sink.notify.side_effect = RuntimeError("sink down")
        orchestrator, _ = _make_orchestrator(sink=sink)
        _start(orchestrator)
        result = orchestrator.run_to_completion()
        assert result.current_stage is ReviewStage.DONE
        assert sink.notify.call_count > 0


class TestCommit:
    def test_final_stage_commits_optimized_version(self) -> None:
        orchestrator, _ = _make_orchestrator()
        initial_id = _start(orchestrator)
        result = orchestrator.run_to_completion()
        assert result.overall_score == 80.0

        current = orchestrator.get_current_version()
        assert current is not None
        assert current.version_id != initial_id
        assert current.content == _OPTIMIZED
        assert current.score == 80.0
        assert current.metadata["stage"] == "optimized"
        assert current.review_result is not None
        assert current.review_result.completed_stages() == list(STAGE_ORDER)

    def test_commit_records_section_changes(self) -> None:
        orchestrator, _ = _make_orchestrator()
        initial_id = _start(orchestrator)
        orchestrator.run_to_completion()
        current = orchestrator.get_current_version()
        assert current is not None
        diff = orchestrator.compare_versions(initial_id, current.version_id)
        assert diff is not None
        assert {(c.kind, c.section_name) for c in diff.changes} == {
            (ChangeKind.ADDITION, "Skills"),
            (ChangeKind.MODIFICATION, "Summary"),
        }

    def test_no_version_before_final_stage(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        for _ in STAGE_ORDER[:-1]:
            orchestrator.advance()
        assert len(orchestrator.get_version_history()) == 1

    def test_commit_emits_version_created_before_stage_completed(self) -> None:
        orchestrator, events = _make_orchestrator()
        _start(orchestrator)
        orchestrator.run_to_completion()
        assert [(e.stage, e.kind) for e in events[-2:]] == [
            ("version-control", EventKind.COMPLETED),
            ("final_integration", EventKind.COMPLETED),
        ]

    def test_advancing_after_done_rejected(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        orchestrator.run_to_completion()
        with pytest.raises(OutOfOrderStageError):
            orchestrator.advance()

    def test_unscored_initial_version_yields_no_improvement(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        orchestrator.run_to_completion()
        metrics = orchestrator.get_improvement_metrics()
        # Only the committed version carries a score.
        assert metrics.version_improvements == []
        assert metrics.overall_improvement == 0

    def test_failed_commit_keeps_final_stage_pending(self) -> None:
        store = FailingCommitStore()
        orchestrator, events = _make_orchestrator(store=store)
        _start(orchestrator)
        for _ in STAGE_ORDER[:-1]:
            orchestrator.advance()
        store.offline = True
        events.clear()

        with pytest.raises(RuntimeError):
            orchestrator.advance()

        assert [e.kind for e in events] == [EventKind.STARTED, EventKind.ERROR]
        assert "could not be completed" in events[-1].message
        result = orchestrator.result
        assert result.current_stage is ReviewStage.FINAL_INTEGRATION
        assert result.final_integration is None
        assert result.optimized_document is None
        assert len(orchestrator.get_version_history()) == 1

    def test_final_stage_retried_after_failed_commit(self) -> None:
        store = FailingCommitStore()
        orchestrator, _ = _make_orchestrator(store=store)
        _start(orchestrator)
        for _ in STAGE_ORDER[:-1]:
            orchestrator.advance()
        store.offline = True
        with pytest.raises(RuntimeError):
            orchestrator.advance()

        store.offline = False
        result = orchestrator.advance()

        assert result.current_stage is ReviewStage.DONE
        current = orchestrator.get_current_version()
        assert current is not None
        assert current.content == _OPTIMIZED
        assert len(orchestrator.get_version_history()) == 2


class TestTargetAtsSystems:
    def test_selection_reaches_ats_aware_stages(self) -> None:
        analyzer = RecordingAnalyzer()
        orchestrator, _ = _make_orchestrator(analyzer=analyzer)
        _start(orchestrator)
        orchestrator.set_target_ats_systems(["lever", "taleo"])
        orchestrator.run_to_completion()

        assert analyzer.systems[ReviewStage.INITIAL_ANALYSIS] == []
        assert analyzer.systems[ReviewStage.ATS_OPTIMIZATION] == ["Lever", "Taleo"]
        assert analyzer.systems[ReviewStage.FINAL_INTEGRATION] == ["Lever", "Taleo"]
        current = orchestrator.get_current_version()
        assert current is not None
        assert current.metadata["target_ats_systems"] == ["lever", "taleo"]

    def test_default_selection_comes_from_target_description(self) -> None:
        analyzer = RecordingAnalyzer()
        orchestrator, _ = _make_orchestrator(analyzer=analyzer)
        _start(orchestrator)
        orchestrator.run_to_completion()
        assert analyzer.systems[ReviewStage.ATS_OPTIMIZATION][0] == "Greenhouse"

    def test_duplicates_collapsed(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        orchestrator.set_target_ats_systems(["lever", "lever", "taleo"])
        assert orchestrator.target_ats_systems == ["lever", "taleo"]

    def test_unknown_system_rejected(self) -> None:
        orchestrator, _ = _make_orchestrator()
        _start(orchestrator)
        before = orchestrator.target_ats_systems
        with pytest.raises(ValueError, match="nosuch"):
            orchestrator.set_target_ats_systems(["lever", "nosuch"])
        assert orchestrator.target_ats_systems == before

    def test_requires_started_session(self) -> None:
        orchestrator, _ = _make_orchestrator()
        with pytest.raises(ReviewNotStartedError):
            orchestrator.set_target_ats_systems(["lever"])


class TestFormats:
    def test_set_format_emits_event_and_is_recorded(self) -> None:
        orchestrator, events = _make_orchestrator()
        orchestrator.set_format("technical")
        assert orchestrator.format is ResumeFormat.TECHNICAL
        assert events[-1].stage == "format-selection"
        _start(orchestrator)
        current = orchestrator.get_current_version()
        assert current is not None
        assert current.metadata["format"] == "technical"

    def test_unknown_format_rejected(self) -> None:
        orchestrator, _ = _make_orchestrator()
        with pytest.raises(ValueError):
            orchestrator.set_format("fancy")

    def test_recommend_format(self) -> None:
        orchestrator, _ = _make_orchestrator()
        assert orchestrator.recommend_format("Backend developer") is ResumeFormat.TECHNICAL


class TestWithoutSession:
    def test_queries_return_empty(self) -> None:
        orchestrator, _ = _make_orchestrator()
        assert orchestrator.document_id is None
        assert orchestrator.get_current_version() is None
        assert orchestrator.get_version_history() == []
        assert orchestrator.get_improvement_metrics().overall_improvement == 0


class TestBuildOrchestrator:
    def test_builds_from_settings(self) -> None:
        settings = Settings(analyzer_provider="example", resume_format="modern")
        store = DocumentVersionStore()
        orchestrator = build_orchestrator(settings, store=store)
        assert orchestrator.store is store
        assert orchestrator.format is ResumeFormat.MODERN

    def test_defaults_to_logging_sink(self) -> None:
        orchestrator = build_orchestrator(Settings(analyzer_provider="example"))
        assert isinstance(orchestrator._sink, LoggingNotificationSink)
