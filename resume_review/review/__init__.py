from resume_review.review.analyzer import StructuredAnalyzer
from resume_review.review.base import BaseStructuredAnalyzer
from resume_review.review.engine import ReviewStageEngine
from resume_review.review.factory import AnalyzerFactory

__all__ = [
    "AnalyzerFactory",
    "BaseStructuredAnalyzer",
    "ReviewStageEngine",
    "StructuredAnalyzer",
]
