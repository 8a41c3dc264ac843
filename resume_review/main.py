import sys
from pathlib import Path

from resume_review.config.settings import Settings
from resume_review.loader.document_loader import DocumentLoader
from resume_review.logging.logger import Log
from resume_review.orchestrator.orchestrator import build_orchestrator
from resume_review.pdf.factory import PdfExtractorFactory
from resume_review.runner.models import ReviewRequest
from resume_review.runner.review_runner import ReviewRunner
from resume_review.versioning.store import DocumentVersionStore


def main() -> int:
    """Entry point: load settings -> load documents -> run review -> report."""
    settings = Settings()
    Log.configure(settings.log_level)

    if not settings.review_document_path:
        Log.error("REVIEW_DOCUMENT_PATH is not set")
        return 2

    loader = DocumentLoader(PdfExtractorFactory.create(settings))
    content = loader.load(Path(settings.review_document_path))
    target_description = ""
    if settings.review_target_path:
        target_description = loader.load(Path(settings.review_target_path))

    store = DocumentVersionStore()
    runner = ReviewRunner(
        lambda: build_orchestrator(settings, store=store),
        settings.review_max_attempts,
    )
    outcome = runner.run(
        ReviewRequest(
            document_id=settings.review_document_id,
            content=content,
            target_description=target_description,
            domain_tag=settings.review_domain_tag,
        )
    )
    if not outcome.succeeded:
        return 1

    if outcome.initial_version_id and outcome.committed_version_id:
        diff = store.compare_versions(outcome.initial_version_id, outcome.committed_version_id)
        if diff is not None:
            for change in diff.changes:
                Log.info(change.description)
    if outcome.result is not None and outcome.result.optimized_document:
        Log.info(f"Overall score: {outcome.result.overall_score:g}")
        sys.stdout.write(outcome.result.optimized_document + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
