"""
Interview reminders tied to an application's lifecycle
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jobtracker.core.application import JobApplication
from jobtracker.notifier.base_notifier import BaseNotifier
from jobtracker.utils.logger import logger


@dataclass
class Reminder:
    app: JobApplication
    remind_at: datetime


class ReminderScheduler:
    """
    Keeps one pending reminder per application and sends the ones that are
    due through a notifier.
    """

    def __init__(self, notifier: Optional[BaseNotifier] = None, lead_time: timedelta = timedelta(hours=24)):
        self.notifier = notifier
        self.lead_time = lead_time
        self._pending: dict[int, Reminder] = {}

    def schedule(self, app: JobApplication) -> Optional[Reminder]:
        """Register (or replace) the reminder for an interview"""
        if app.id is None or not app.is_interview or app.important_date is None:
            return None

        reminder = Reminder(app=app, remind_at=app.important_date - self.lead_time)
        self._pending[app.id] = reminder
        logger.info(f"Reminder for {app.company} set for {reminder.remind_at:%Y-%m-%d %H:%M}")
        return reminder

    def cancel(self, app: JobApplication) -> bool:
        reminder = self._pending.pop(app.id, None)
        if reminder:
            logger.info(f"Cancelled reminder for {app.company}")
        return reminder is not None

    def pending(self) -> list[Reminder]:
        return sorted(self._pending.values(), key=lambda r: r.remind_at)

    def dispatch_due(self, now: Optional[datetime] = None) -> list[Reminder]:
        """Send every reminder whose time has come. Unsent ones stay pending."""
        now = now or datetime.now()
        sent = []
        for reminder in self.pending():
            if reminder.remind_at > now:
                break
            if self.notifier is None or not self.notifier.notify_interview(reminder.app):
                logger.warning(f"Reminder for {reminder.app.company} could not be sent")
                continue
            del self._pending[reminder.app.id]
            sent.append(reminder)
        return sent


class NullReminderScheduler(ReminderScheduler):
    """Scheduler used when reminders are disabled"""

    def schedule(self, app: JobApplication) -> Optional[Reminder]:
        return None
