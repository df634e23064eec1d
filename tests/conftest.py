"""
Shared fixtures: an in-memory database, a fixed clock and a notifier that
records instead of sending.
"""

from datetime import datetime

import pytest

from jobtracker.notifier.base_notifier import BaseNotifier, Notification
from jobtracker.notifier.reminders import ReminderScheduler
from jobtracker.store import ApplicationStore
from jobtracker.utils.database import Database

NOW = datetime(2024, 3, 15, 9, 30)


class RecordingNotifier(BaseNotifier):
    SERVICE_NAME = "Recording"

    def __init__(self, succeed: bool = True):
        self.sent: list[Notification] = []
        self.succeed = succeed

    def send(self, notification: Notification) -> bool:
        self.sent.append(notification)
        return self.succeed


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    database.engine.dispose()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler(notifier):
    return ReminderScheduler(notifier)


@pytest.fixture
def store(db, scheduler, clock):
    return ApplicationStore(db, scheduler=scheduler, clock=clock)
