from collections.abc import Callable

from resume_review.logging.logger import Log
from resume_review.notifications.base import BaseNotificationSink
from resume_review.notifications.models import EventKind, NotificationEvent


class LoggingNotificationSink(BaseNotificationSink):
    """Writes every event to the application log."""

    def notify(self, event: NotificationEvent) -> None:
        line = f"[{event.stage}] {event.kind.value}: {event.message}"
        if event.kind is EventKind.ERROR:
            Log.warning(line)
        else:
            Log.info(line)


class CallbackNotificationSink(BaseNotificationSink):
    """Forwards every event to a plain callable, e.g. a UI push function."""

    def __init__(self, callback: Callable[[NotificationEvent], object]) -> None:
        self._callback = callback

    def notify(self, event: NotificationEvent) -> None:
        self._callback(event)


class NullNotificationSink(BaseNotificationSink):
    """Discards every event."""

    def notify(self, event: NotificationEvent) -> None:
        _ = event
