"""
Base notifier class
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional
from dataclasses import dataclass, field

from jobtracker.core.application import JobApplication


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass
class Notification:
    """Notification data"""
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.NORMAL
    url: Optional[str] = None
    tags: list[str] = field(default_factory=list)


class BaseNotifier(ABC):
    """Abstract base class for notification services"""

    SERVICE_NAME = "Base"

    @abstractmethod
    def send(self, notification: Notification) -> bool:
        """
        Send a notification.

        Returns:
            True if sent successfully
        """

    def notify_interview(self, app: JobApplication) -> bool:
        """Remind the user about an upcoming interview"""
        when = app.important_date.strftime("%Y-%m-%d %H:%M") if app.important_date else "soon"
        return self.send(Notification(
            title=f"Interview: {app.company}",
            message=f"{app.status} for {app.title} at {app.company} on {when}",
            priority=NotificationPriority.HIGH,
            tags=["interview", app.company.lower().replace(" ", "_")],
        ))
