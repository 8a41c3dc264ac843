from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    STARTED = "started"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class NotificationEvent:
    """One observational event emitted by the review pipeline."""

    stage: str
    kind: EventKind
    message: str
    title: str = ""
