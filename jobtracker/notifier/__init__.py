"""
Notifier package - interview reminders and push notifications
"""

from jobtracker.notifier.base_notifier import BaseNotifier, Notification, NotificationPriority
from jobtracker.notifier.ntfy import NtfyNotifier
from jobtracker.notifier.reminders import NullReminderScheduler, Reminder, ReminderScheduler

__all__ = [
    "BaseNotifier",
    "Notification",
    "NotificationPriority",
    "NtfyNotifier",
    "NullReminderScheduler",
    "Reminder",
    "ReminderScheduler",
]
