from abc import ABC, abstractmethod
from dataclasses import dataclass

from docanalyzer.logging.logger import Log


@dataclass(frozen=True)
class Notification:
    """User-facing message about one file."""

    title: str
    description: str
    variant: str = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


class BaseNotifier(ABC):
    """Contract for user-facing notification channels."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification. Must not raise."""


class LogNotifier(BaseNotifier):
    """Writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        message = f"{notification.title}: {notification.description}"
        if notification.is_error:
            Log.error(message)
        else:
            Log.info(message)
