from dataclasses import dataclass, field


@dataclass(frozen=True)
class AtsSystem:
    """A catalogued Applicant Tracking System."""

    id: str
    name: str
    company: str
    description: str
    popularity: int  # 1-100
    key_features: tuple[str, ...] = ()
    special_considerations: tuple[str, ...] = ()
    website: str | None = None


@dataclass(frozen=True)
class AtsMatch:
    """A catalog entry together with its relevance score for a description."""

    system: AtsSystem
    score: float = field(default=0.0)
