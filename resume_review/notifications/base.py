from abc import ABC, abstractmethod

from resume_review.notifications.models import NotificationEvent


class BaseNotificationSink(ABC):
    """Contract for one-way notification receivers.

    The pipeline never consumes a return value and never waits on delivery.
    """

    @abstractmethod
    def notify(self, event: NotificationEvent) -> None:
        """Deliver one event."""
