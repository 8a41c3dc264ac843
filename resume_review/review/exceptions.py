class ReviewError(Exception):
    """Base exception for all review pipeline errors."""


class OutOfOrderStageError(ReviewError):
    """Raised when a stage runs before its prerequisite results are recorded.

    Always a programming error in the caller; retrying without fixing the call
    order fails again.
    """


class MalformedAnalyzerResponseError(ReviewError):
    """Raised when the analyzer output cannot be parsed into the stage's shape.

    Retryable: the same stage may be invoked again.
    """


class AnalyzerNetworkError(ReviewError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ReviewNotStartedError(ReviewError):
    """Raised when a review session is advanced before it was started."""


class PromptTemplateError(ReviewError):
    """Raised when a stage prompt template cannot be loaded or rendered."""
