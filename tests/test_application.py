from datetime import datetime

import pytest
from pydantic import ValidationError

from jobtracker.core.application import ApplicationStatus, JobApplication, StatusKind
from jobtracker.core.exceptions import InvalidStatusError


@pytest.mark.parametrize("text, expected", [
    ("Applied", ApplicationStatus.applied()),
    ("Interview 1", ApplicationStatus.interview(1)),
    ("Interview 12", ApplicationStatus.interview(12)),
    ("Accepted", ApplicationStatus.accepted()),
    ("Rejected", ApplicationStatus.rejected()),
])
def test_parse_known_statuses(text, expected):
    status = ApplicationStatus.parse(text)
    assert status == expected
    assert str(status) == text


@pytest.mark.parametrize("text", [
    "", "Pending", "Interview", "Interview two", "Interview 0", "Interview 1 2", "applied",
    "Interview \u00b2", "Interview \uff11",
])
def test_parse_rejects_malformed_statuses(text):
    with pytest.raises(InvalidStatusError):
        ApplicationStatus.parse(text)


def test_invalid_status_error_is_a_value_error():
    with pytest.raises(ValueError):
        ApplicationStatus.parse("Ghosted")


def test_terminal_and_interview_flags():
    assert ApplicationStatus.accepted().is_terminal
    assert ApplicationStatus.rejected().is_terminal
    assert not ApplicationStatus.interview(2).is_terminal
    assert ApplicationStatus.interview(2).is_interview
    assert not ApplicationStatus.applied().is_interview


def test_new_application_defaults():
    app = JobApplication(company="Acme", title="Engineer", date_applied=datetime(2024, 1, 1))
    assert app.status == StatusKind.APPLIED.value
    assert app.is_favourite is False
    assert app.important_date is None
    assert app.id is None


def test_blank_company_is_rejected():
    with pytest.raises(ValidationError):
        JobApplication(company="   ", title="Engineer", date_applied=datetime(2024, 1, 1))


def test_parsed_status_tolerates_malformed_stored_value():
    app = JobApplication(company="Acme", title="Engineer", date_applied=datetime(2024, 1, 1), status="Interview x")
    assert app.is_interview
    assert app.parsed_status is None
