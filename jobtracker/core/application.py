"""
Application data model - a tracked job application and its status
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from jobtracker.core.exceptions import InvalidStatusError


INTERVIEW_PREFIX = "Interview"

# Passing this as an interview date means "use the current time"
EPOCH_SENTINEL = datetime.fromtimestamp(0)


class StatusKind(str, Enum):
    """Stage of an application"""
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class ApplicationStatus(BaseModel):
    """
    Parsed form of the persisted status string.

    Interviews carry a 1-based round number ("Interview 2"); the other
    kinds carry nothing.
    """
    kind: StatusKind
    level: Optional[int] = Field(default=None, ge=1)

    model_config = {"frozen": True}

    @classmethod
    def applied(cls) -> "ApplicationStatus":
        return cls(kind=StatusKind.APPLIED)

    @classmethod
    def interview(cls, level: int) -> "ApplicationStatus":
        return cls(kind=StatusKind.INTERVIEW, level=level)

    @classmethod
    def accepted(cls) -> "ApplicationStatus":
        return cls(kind=StatusKind.ACCEPTED)

    @classmethod
    def rejected(cls) -> "ApplicationStatus":
        return cls(kind=StatusKind.REJECTED)

    @classmethod
    def parse(cls, text: str) -> "ApplicationStatus":
        """Parse "Applied", "Interview N", "Accepted" or "Rejected" """
        if text is None:
            raise InvalidStatusError(text)

        value = text.strip()
        if value.startswith(INTERVIEW_PREFIX):
            parts = value.split()
            # ASCII digits only
            level_text = parts[1] if len(parts) == 2 else ""
            if parts[0] != INTERVIEW_PREFIX or not (level_text.isascii() and level_text.isdigit()):
                raise InvalidStatusError(text)
            level = int(level_text)
            if level < 1:
                raise InvalidStatusError(text)
            return cls.interview(level)

        try:
            kind = StatusKind(value)
        except ValueError:
            raise InvalidStatusError(text) from None
        return cls(kind=kind)

    @property
    def is_interview(self) -> bool:
        return self.kind == StatusKind.INTERVIEW

    @property
    def is_terminal(self) -> bool:
        return self.kind in (StatusKind.ACCEPTED, StatusKind.REJECTED)

    def __str__(self) -> str:
        if self.is_interview:
            return f"{INTERVIEW_PREFIX} {self.level}"
        return self.kind.value


StatusLike = Union[str, ApplicationStatus]


class JobApplication(BaseModel):
    """
    A single job application tracked by the user.
    """
    # Assigned by the database on insert
    id: Optional[int] = Field(default=None, description="Record ID")

    company: str = Field(..., min_length=1, description="Company name")
    title: str = Field(..., min_length=1, description="Job title")
    date_applied: datetime = Field(..., description="When the application was sent")

    # Persisted as the plain string so existing rows always load
    status: str = Field(default=StatusKind.APPLIED.value)
    is_favourite: bool = False

    # Only set while the application is at an interview stage
    important_date: Optional[datetime] = None

    # When the reminder for the current interview went out
    reminded_at: Optional[datetime] = None

    @field_validator("company", "title")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def is_interview(self) -> bool:
        return (self.status or "").startswith(INTERVIEW_PREFIX)

    @property
    def parsed_status(self) -> Optional[ApplicationStatus]:
        """The status as a variant, or None when the stored string is malformed"""
        try:
            return ApplicationStatus.parse(self.status)
        except InvalidStatusError:
            return None

    def __str__(self) -> str:
        return f"{self.title} at {self.company} [{self.status}]"
