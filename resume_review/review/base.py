from abc import ABC, abstractmethod
from collections.abc import Sequence

from resume_review.review.models import AnalyzerResponse, ReviewResult
from resume_review.review.stages import ReviewStage


class BaseStructuredAnalyzer(ABC):
    """Contract for the collaborator that performs one stage of analysis."""

    @abstractmethod
    def analyze(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        prior_results: ReviewResult,
        target_systems: Sequence[str] = (),
    ) -> AnalyzerResponse:
        """Analyze a document for one stage.

        Args:
            stage: The stage being executed.
            document_text: Full text of the document under review.
            target_description: Comparison text, e.g. a job posting.
            domain_tag: Domain of the target, e.g. an industry.
            prior_results: Results of every stage executed so far.
            target_systems: Names of the ATS systems to optimize for.

        Returns:
            AnalyzerResponse with the structured stage result and, for the
            final stage, the rewritten document.

        Raises:
            MalformedAnalyzerResponseError: if the output cannot be parsed.
            AnalyzerNetworkError: if the provider cannot be reached.
        """
