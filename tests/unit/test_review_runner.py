import threading
from collections.abc import Sequence
from typing import Any
from unittest.mock import MagicMock

from resume_review.orchestrator.orchestrator import ReviewOrchestrator
from resume_review.review.base import BaseStructuredAnalyzer
from resume_review.review.engine import ReviewStageEngine
from resume_review.review.exceptions import (
    AnalyzerNetworkError,
    MalformedAnalyzerResponseError,
    PromptTemplateError,
)
from resume_review.review.models import AnalyzerResponse, ReviewResult
from resume_review.review.stages import STAGE_FIELDS, ReviewStage
from resume_review.runner.models import ReviewRequest
from resume_review.runner.review_runner import ReviewRunner
from resume_review.versioning.store import DocumentVersionStore


class FlakyAnalyzer(BaseStructuredAnalyzer):
    """Fails the configured stages a fixed number of times before succeeding."""

    def __init__(self, failures: dict[ReviewStage, list[Exception]] | None = None) -> None:
        self.failures = failures or {}
        self.calls: list[ReviewStage] = []

    def analyze(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        prior_results: ReviewResult,
        target_systems: Sequence[str] = (),
    ) -> AnalyzerResponse:
        self.calls.append(stage)
        pending = self.failures.get(stage)
        if pending:
            raise pending.pop(0)
        fields = STAGE_FIELDS[stage]
        payload: dict[str, Any] = {fields.score_field: 75}
        for name in fields.list_fields:
            payload[name] = []
        rewritten = "SUMMARY\nRewritten" if stage is ReviewStage.FINAL_INTEGRATION else None
        return AnalyzerResponse(structured_result=payload, rewritten_text=rewritten)


def _make_runner(
    analyzer: BaseStructuredAnalyzer, max_attempts: int = 3
) -> tuple[ReviewRunner, DocumentVersionStore]:
    store = DocumentVersionStore()
    runner = ReviewRunner(
        lambda: ReviewOrchestrator(engine=ReviewStageEngine(analyzer), store=store),
        max_attempts,
    )
    return runner, store


def _make_request(document_id: str = "doc") -> ReviewRequest:
    return ReviewRequest(
        document_id=document_id,
        content="SUMMARY\nOriginal",
        target_description="job",
        domain_tag="technology",
    )


class TestSuccessfulReview:
    def test_runs_every_stage(self) -> None:
        analyzer = FlakyAnalyzer()
        runner, _ = _make_runner(analyzer)

        outcome = runner.run(_make_request())

        assert outcome.succeeded
        assert outcome.attempts == 5
        assert len(analyzer.calls) == 5
        assert outcome.result is not None
        assert outcome.result.current_stage is ReviewStage.DONE

    def test_reports_versions(self) -> None:
        runner, store = _make_runner(FlakyAnalyzer())

        outcome = runner.run(_make_request())

        current = store.get_current_version("doc")
        assert current is not None
        assert outcome.committed_version_id == current.version_id
        assert outcome.initial_version_id != outcome.committed_version_id


class TestRetryBelowMax:
    def test_retries_malformed_response(self) -> None:
        analyzer = FlakyAnalyzer(
            {ReviewStage.ATS_OPTIMIZATION: [MalformedAnalyzerResponseError("bad json")]}
        )
        runner, _ = _make_runner(analyzer, max_attempts=3)

        outcome = runner.run(_make_request())

        assert outcome.succeeded
        assert outcome.attempts == 6
        assert analyzer.calls.count(ReviewStage.ATS_OPTIMIZATION) == 2

    def test_failure_count_resets_per_stage(self) -> None:
        analyzer = FlakyAnalyzer(
            {
                ReviewStage.INITIAL_ANALYSIS: [AnalyzerNetworkError("timeout")],
                ReviewStage.EXECUTIVE_IMPACT: [AnalyzerNetworkError("timeout")],
            }
        )
        runner, _ = _make_runner(analyzer, max_attempts=2)

        outcome = runner.run(_make_request())

        assert outcome.succeeded
        assert outcome.attempts == 7


class TestFailureAtMax:
    def test_gives_up_after_max_attempts(self) -> None:
        analyzer = FlakyAnalyzer(
            {
                ReviewStage.TECHNICAL_OPTIMIZATION: [
                    AnalyzerNetworkError("down"),
                    AnalyzerNetworkError("down"),
                    AnalyzerNetworkError("still down"),
                ]
            }
        )
        runner, store = _make_runner(analyzer, max_attempts=2)

        outcome = runner.run(_make_request())

        assert not outcome.succeeded
        assert outcome.error_message == "down"
        assert outcome.attempts == 3
        assert outcome.committed_version_id is None
        assert outcome.result is not None
        assert outcome.result.current_stage is ReviewStage.TECHNICAL_OPTIMIZATION
        assert len(store.get_all_versions("doc")) == 1

    def test_non_retryable_error_fails_immediately(self) -> None:
        analyzer = FlakyAnalyzer(
            {ReviewStage.INITIAL_ANALYSIS: [PromptTemplateError("missing template")]}
        )
        runner, _ = _make_runner(analyzer, max_attempts=3)

        outcome = runner.run(_make_request())

        assert not outcome.succeeded
        assert outcome.error_message == "missing template"
        assert analyzer.calls == [ReviewStage.INITIAL_ANALYSIS]

    def test_start_failure_reports_no_result(self) -> None:
        orchestrator = MagicMock(spec=ReviewOrchestrator)
        orchestrator.start_review.side_effect = RuntimeError("store offline")
        runner = ReviewRunner(lambda: orchestrator, 3)

        outcome = runner.run(_make_request())

        assert not outcome.succeeded
        assert outcome.initial_version_id is None
        assert outcome.result is None
        assert outcome.attempts == 0


class TestPerDocumentLocking:
    def test_lock_entry_held_only_while_running(self) -> None:
        runner, _ = _make_runner(FlakyAnalyzer())
        with runner._document_lock("a"):
            assert set(runner._locks) == {"a"}
            with runner._document_lock("b"):
                assert set(runner._locks) == {"a", "b"}
        assert runner._locks == {}

    def test_lock_table_empty_after_runs(self) -> None:
        runner, _ = _make_runner(FlakyAnalyzer())
        for document_id in ("a", "b", "c"):
            runner.run(_make_request(document_id))
        assert runner._locks == {}

    def test_lock_released_after_failed_run(self) -> None:
        analyzer = FlakyAnalyzer(
            {ReviewStage.INITIAL_ANALYSIS: [PromptTemplateError("missing template")]}
        )
        runner, _ = _make_runner(analyzer)
        runner.run(_make_request())
        assert runner._locks == {}

    def test_concurrent_runs_on_one_document(self) -> None:
        runner, store = _make_runner(FlakyAnalyzer())
        outcomes = []

        def work() -> None:
            outcomes.append(runner.run(_make_request()))

        threads = [threading.Thread(target=work) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(outcome.succeeded for outcome in outcomes)
        assert len(store.get_all_versions("doc")) == 6
        current = store.get_current_version("doc")
        assert current is not None
        assert current.version_id in {o.committed_version_id for o in outcomes}
        assert runner._locks == {}
