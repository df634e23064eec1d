from datetime import datetime

import httpx
import pytest

from jobtracker.core.application import JobApplication
from jobtracker.notifier.base_notifier import Notification, NotificationPriority
from jobtracker.notifier.ntfy import NtfyNotifier


def client_returning(status_code, captured):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status_code)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_send_posts_to_topic():
    captured = []
    notifier = NtfyNotifier("jobtracker-test", client=client_returning(200, captured))

    ok = notifier.send(Notification(
        title="Interview: Acme",
        message="Interview 1 for Engineer",
        priority=NotificationPriority.HIGH,
        tags=["interview"],
    ))

    assert ok is True
    request = captured[0]
    assert str(request.url) == "https://ntfy.sh/jobtracker-test"
    assert request.headers["Title"] == "Interview: Acme"
    assert request.headers["Priority"] == "4"
    assert request.headers["Tags"] == "interview"
    assert request.content == b"Interview 1 for Engineer"


def test_send_reports_http_failure():
    notifier = NtfyNotifier("jobtracker-test", client=client_returning(500, []))
    assert notifier.send(Notification(title="t", message="m")) is False


def test_send_reports_transport_failure():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    notifier = NtfyNotifier("jobtracker-test", client=httpx.Client(transport=httpx.MockTransport(handler)))
    assert notifier.send(Notification(title="t", message="m")) is False


def test_notify_interview_message():
    captured = []
    notifier = NtfyNotifier("jobtracker-test", client=client_returning(200, captured))
    app = JobApplication(
        id=1,
        company="Acme Corp",
        title="Engineer",
        date_applied=datetime(2024, 1, 1),
        status="Interview 2",
        important_date=datetime(2024, 3, 20, 10, 0),
    )

    assert notifier.notify_interview(app) is True
    assert captured[0].content == b"Interview 2 for Engineer at Acme Corp on 2024-03-20 10:00"
    assert captured[0].headers["Tags"] == "interview,acme_corp"


def test_missing_topic_is_an_error():
    with pytest.raises(ValueError):
        NtfyNotifier("")
