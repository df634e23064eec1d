"""
Presentation helpers - date strings and status styles for listings
"""

from datetime import datetime

from jobtracker.core.application import JobApplication, StatusKind


NOT_AVAILABLE = "N/A"

# Row backgrounds are muted, headers are saturated
ROW_STYLES = {
    StatusKind.REJECTED: "red",
    StatusKind.ACCEPTED: "green",
    StatusKind.INTERVIEW: "yellow",
}
DEFAULT_ROW_STYLE = "blue"

HEADER_STYLES = {
    StatusKind.REJECTED: "bold magenta",
    StatusKind.ACCEPTED: "bold green",
    StatusKind.INTERVIEW: "bold dark_orange",
}
DEFAULT_HEADER_STYLE = "bold purple"


def format_date(value: datetime, locale: str = "en_US") -> str:
    """Short date, e.g. 1/5/24 for en_US and 05/01/2024 for en_GB"""
    if locale == "en_US":
        return f"{value.month}/{value.day}/{value.year % 100:02d}"
    if locale == "en_GB":
        return value.strftime("%d/%m/%Y")
    return value.date().isoformat()


def interview_date_text(app: JobApplication, locale: str = "en_US") -> str:
    if app.important_date is None:
        return NOT_AVAILABLE
    return format_date(app.important_date, locale)


def _status_kind(app: JobApplication):
    if app.is_interview:
        return StatusKind.INTERVIEW
    if app.status == StatusKind.REJECTED.value:
        return StatusKind.REJECTED
    if app.status == StatusKind.ACCEPTED.value:
        return StatusKind.ACCEPTED
    return None


def row_style(app: JobApplication) -> str:
    return ROW_STYLES.get(_status_kind(app), DEFAULT_ROW_STYLE)


def header_style(app: JobApplication) -> str:
    return HEADER_STYLES.get(_status_kind(app), DEFAULT_HEADER_STYLE)
