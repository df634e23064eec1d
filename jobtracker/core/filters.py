"""
Filters and sort orders for listing applications.

Each variant knows how to express itself both as a SQLAlchemy clause
(for queries against the database) and as a plain Python predicate or
key (for records already in memory).
"""

from enum import Enum
from typing import Iterable, Optional

from jobtracker.core.application import INTERVIEW_PREFIX, JobApplication, StatusKind


class ApplicationFilter(str, Enum):
    """Which applications a listing shows"""
    NONE = "all"
    FAVOURITE = "favourite"
    APPLIED = "applied"
    INTERVIEW = "interview"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def clause(self, model):
        """SQLAlchemy filter expression against `model`, or None for no filter"""
        if self is ApplicationFilter.NONE:
            return None
        if self is ApplicationFilter.FAVOURITE:
            return model.is_favourite.is_(True)
        if self is ApplicationFilter.INTERVIEW:
            return model.status.startswith(INTERVIEW_PREFIX)
        return model.status == _EXACT_STATUS[self]

    def matches(self, app: JobApplication) -> bool:
        if self is ApplicationFilter.NONE:
            return True
        if self is ApplicationFilter.FAVOURITE:
            return app.is_favourite
        if self is ApplicationFilter.INTERVIEW:
            return app.is_interview
        return app.status == _EXACT_STATUS[self]


_EXACT_STATUS = {
    ApplicationFilter.APPLIED: StatusKind.APPLIED.value,
    ApplicationFilter.ACCEPTED: StatusKind.ACCEPTED.value,
    ApplicationFilter.REJECTED: StatusKind.REJECTED.value,
}


class SortOrder(str, Enum):
    """Ordering of a listing by applied date"""
    DATE_ASCENDING = "asc"
    DATE_DESCENDING = "desc"

    def order_by(self, model):
        if self is SortOrder.DATE_ASCENDING:
            return (model.date_applied.asc(), model.id.asc())
        return (model.date_applied.desc(), model.id.desc())

    def sort(self, apps: Iterable[JobApplication]) -> list[JobApplication]:
        return sorted(
            apps,
            key=lambda app: (app.date_applied, app.id or 0),
            reverse=self is SortOrder.DATE_DESCENDING,
        )


def apply(
    apps: Iterable[JobApplication],
    app_filter: ApplicationFilter = ApplicationFilter.NONE,
    sort: Optional[SortOrder] = None,
) -> list[JobApplication]:
    """Filter and sort records in memory"""
    selected = [app for app in apps if app_filter.matches(app)]
    return sort.sort(selected) if sort else selected
