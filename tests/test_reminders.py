from datetime import datetime, timedelta

from jobtracker.core.application import JobApplication
from jobtracker.notifier.reminders import NullReminderScheduler, ReminderScheduler

from tests.conftest import NOW, RecordingNotifier


def interview(app_id, company, when):
    return JobApplication(
        id=app_id,
        company=company,
        title="Engineer",
        date_applied=datetime(2024, 1, 1),
        status="Interview 1",
        important_date=when,
    )


def test_moving_to_interview_schedules_reminder(store, scheduler):
    app = store.add("Acme", "Engineer", datetime(2024, 1, 1))
    store.update_status(app, "Interview 1", datetime(2024, 3, 20, 10, 0))

    pending = scheduler.pending()
    assert len(pending) == 1
    assert pending[0].app.id == app.id
    assert pending[0].remind_at == datetime(2024, 3, 19, 10, 0)


def test_leaving_interview_cancels_reminder(store, scheduler):
    app = store.add("Acme", "Engineer", datetime(2024, 1, 1))
    app = store.update_status(app, "Interview 1", datetime(2024, 3, 20))

    store.update_status(app, "Accepted")
    assert scheduler.pending() == []


def test_delete_cancels_reminder(store, scheduler):
    app = store.add("Acme", "Engineer", datetime(2024, 1, 1))
    app = store.update_status(app, "Interview 2", datetime(2024, 3, 20))

    assert store.delete(app) is True
    assert scheduler.pending() == []


def test_later_round_replaces_reminder(store, scheduler):
    app = store.add("Acme", "Engineer", datetime(2024, 1, 1))
    app = store.update_status(app, "Interview 1", datetime(2024, 3, 20))
    store.update_status(app, "Interview 2", datetime(2024, 4, 1))

    pending = scheduler.pending()
    assert len(pending) == 1
    assert pending[0].app.status == "Interview 2"


def test_dispatch_due_sends_only_due_reminders():
    notifier = RecordingNotifier()
    scheduler = ReminderScheduler(notifier, lead_time=timedelta(hours=2))
    scheduler.schedule(interview(1, "Acme", NOW + timedelta(hours=1)))
    scheduler.schedule(interview(2, "Globex", NOW + timedelta(days=3)))

    sent = scheduler.dispatch_due(NOW)

    assert [r.app.company for r in sent] == ["Acme"]
    assert [n.title for n in notifier.sent] == ["Interview: Acme"]
    assert [r.app.company for r in scheduler.pending()] == ["Globex"]


def test_failed_send_stays_pending():
    scheduler = ReminderScheduler(RecordingNotifier(succeed=False))
    scheduler.schedule(interview(1, "Acme", NOW))

    assert scheduler.dispatch_due(NOW) == []
    assert len(scheduler.pending()) == 1


def test_non_interview_is_not_scheduled():
    scheduler = ReminderScheduler(RecordingNotifier())
    app = JobApplication(id=1, company="Acme", title="Engineer", date_applied=NOW)

    assert scheduler.schedule(app) is None
    assert scheduler.cancel(app) is False


def test_null_scheduler_tracks_nothing():
    scheduler = NullReminderScheduler()
    assert scheduler.schedule(interview(1, "Acme", NOW)) is None
    assert scheduler.pending() == []
