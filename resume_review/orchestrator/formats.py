from dataclasses import dataclass
from enum import Enum


class ResumeFormat(str, Enum):
    STANDARD = "standard"
    MODERN = "modern"
    CREATIVE = "creative"
    EXECUTIVE = "executive"
    TECHNICAL = "technical"
    ATS_OPTIMIZED = "ats_optimized"


@dataclass(frozen=True)
class ResumeFormatDetails:
    id: ResumeFormat
    name: str
    description: str
    ats_compatibility_score: int
    suitable_for: tuple[str, ...]


FORMAT_DETAILS: dict[ResumeFormat, ResumeFormatDetails] = {
    ResumeFormat.STANDARD: ResumeFormatDetails(
        id=ResumeFormat.STANDARD,
        name="Standard",
        description="A traditional resume format suitable for most industries.",
        ats_compatibility_score=90,
        suitable_for=("All industries", "Entry to mid-level positions"),
    ),
    ResumeFormat.MODERN: ResumeFormatDetails(
        id=ResumeFormat.MODERN,
        name="Modern",
        description="A clean, contemporary design with a focus on readability.",
        ats_compatibility_score=85,
        suitable_for=("Tech", "Design", "Marketing", "Startups"),
    ),
    ResumeFormat.CREATIVE: ResumeFormatDetails(
        id=ResumeFormat.CREATIVE,
        name="Creative",
        description="A visually striking design for creative professionals.",
        ats_compatibility_score=70,
        suitable_for=("Design", "Art", "Marketing", "Entertainment"),
    ),
    ResumeFormat.EXECUTIVE: ResumeFormatDetails(
        id=ResumeFormat.EXECUTIVE,
        name="Executive",
        description="A sophisticated format for senior-level professionals.",
        ats_compatibility_score=85,
        suitable_for=("Executive positions", "Senior management", "Board roles"),
    ),
    ResumeFormat.TECHNICAL: ResumeFormatDetails(
        id=ResumeFormat.TECHNICAL,
        name="Technical",
        description="A format optimized for technical roles with skills emphasis.",
        ats_compatibility_score=95,
        suitable_for=("Engineering", "IT", "Data Science", "Research"),
    ),
    ResumeFormat.ATS_OPTIMIZED: ResumeFormatDetails(
        id=ResumeFormat.ATS_OPTIMIZED,
        name="ATS Optimized",
        description="Maximized for Applicant Tracking System compatibility.",
        ats_compatibility_score=100,
        suitable_for=("All industries", "Large company applications", "Online applications"),
    ),
}

# Checked in order; the first group with a keyword in the description wins.
_FORMAT_KEYWORDS: tuple[tuple[ResumeFormat, tuple[str, ...]], ...] = (
    (ResumeFormat.TECHNICAL, ("engineer", "developer", "programmer", "data scientist")),
    (ResumeFormat.CREATIVE, ("designer", "creative", "artist", "ux")),
    (
        ResumeFormat.EXECUTIVE,
        ("ceo", "cto", "director", "executive", "vp", "vice president"),
    ),
    (ResumeFormat.MODERN, ("startup", "innovation", "tech company")),
)


def recommend_format(target_description: str) -> ResumeFormat:
    """Pick a resume format from keywords in the target description."""
    text = target_description.lower()
    for resume_format, keywords in _FORMAT_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return resume_format
    return ResumeFormat.ATS_OPTIMIZED
