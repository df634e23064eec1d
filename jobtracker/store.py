"""
Application store - the in-memory view of tracked applications.

Every mutation is written to the database first and the cache is then
reloaded from it, so the cache never holds state the database rejected.
Persistence errors are logged and re-raised; the cache keeps its previous
contents when a fetch or save fails.
"""

from datetime import datetime
from typing import Callable, Optional

from jobtracker.core.application import (
    EPOCH_SENTINEL,
    ApplicationStatus,
    JobApplication,
    StatusKind,
    StatusLike,
)
from jobtracker.core.exceptions import FetchError
from jobtracker.core.filters import ApplicationFilter, SortOrder
from jobtracker.notifier.reminders import NullReminderScheduler, ReminderScheduler
from jobtracker.utils.database import Database
from jobtracker.utils.logger import logger

Subscriber = Callable[[list[JobApplication]], None]


class ApplicationStore:
    """
    Owns the cached list of applications shown to the user and applies
    create/update/delete/query operations against the database.
    """

    def __init__(
        self,
        db: Database,
        scheduler: Optional[ReminderScheduler] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.scheduler = scheduler or NullReminderScheduler()
        self.clock = clock
        self.applications: list[JobApplication] = []
        self._subscribers: list[Subscriber] = []

        self.fetch_all()

    # Observers
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Call `callback` with the new cache after every refresh.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, apps: list[JobApplication]) -> None:
        self.applications = apps
        for callback in list(self._subscribers):
            callback(list(apps))

    # Queries
    def fetch_all(self) -> list[JobApplication]:
        """Reload every application, unfiltered, in insertion order"""
        return self.query(ApplicationFilter.NONE, None)

    def query(
        self,
        app_filter: ApplicationFilter = ApplicationFilter.NONE,
        sort: Optional[SortOrder] = None,
    ) -> list[JobApplication]:
        """Replace the cache with the applications matching `app_filter`"""
        try:
            apps = self.db.list_applications(app_filter, sort)
        except FetchError:
            logger.error(f"Keeping {len(self.applications)} cached applications after failed fetch")
            raise

        self._publish(apps)
        return self.applications

    def find_by_company(self, company: str) -> list[JobApplication]:
        """Applications to exactly this company. Leaves the cache alone."""
        return self.db.find_by_company(company)

    def stats(self) -> dict:
        return self.db.get_stats()

    # Mutations
    def add(self, company: str, title: str, date_applied: datetime) -> JobApplication:
        """Track a new application, starting at Applied and not favourited"""
        app = JobApplication(company=company, title=title, date_applied=date_applied)
        app_id = self.db.add_application(app)
        logger.info(f"Added application: {app}")

        self.fetch_all()
        return self._cached(app_id) or self.db.get_application(app_id)

    def delete(self, app: JobApplication) -> bool:
        """
        Delete an application and cancel its reminder.

        Does nothing unless the application is in the current cache.
        """
        if not self._is_cached(app):
            logger.debug(f"Ignoring delete of uncached application {app.id}")
            return False

        self.scheduler.cancel(app)
        removed = self.db.delete_application(app.id)
        if removed:
            logger.info(f"Deleted application: {app}")
        else:
            logger.warning(f"Application {app.id} was already gone from the database")

        self.fetch_all()
        return removed

    def toggle_favourite(self, app: JobApplication) -> JobApplication:
        """Flip the stored flag, whatever the caller's copy says"""
        return self._refreshed(app, self.db.toggle_favourite(app.id))

    def mark_reminded(self, app: JobApplication, when: datetime) -> JobApplication:
        """Record that the reminder for the current interview was sent"""
        return self._save(app, reminded_at=when)

    def update_status(
        self,
        app: JobApplication,
        status: StatusLike,
        important_date: Optional[datetime] = None,
    ) -> JobApplication:
        """
        Move an application to `status`.

        Interview stages record `important_date`, defaulting to now when it
        is omitted or the epoch sentinel. Any other stage clears it and
        cancels the pending reminder.
        """
        parsed = status if isinstance(status, ApplicationStatus) else ApplicationStatus.parse(status)

        if parsed.is_interview:
            if important_date is None or important_date == EPOCH_SENTINEL:
                important_date = self.clock()
        else:
            important_date = None

        # Any status change clears the sent-reminder marker
        saved = self._save(app, status=str(parsed), important_date=important_date, reminded_at=None)
        if saved is not app:
            if parsed.is_interview:
                self.scheduler.schedule(saved)
            else:
                self.scheduler.cancel(saved)
        return saved

    def _save(self, app: JobApplication, **changes) -> JobApplication:
        """Persist `changes`, refresh the cache and return the stored record"""
        return self._refreshed(app, self.db.update_application(app.id, **changes))

    def _refreshed(self, app: JobApplication, saved: Optional[JobApplication]) -> JobApplication:
        if saved is None:
            logger.warning(f"Application {app.id} no longer exists; nothing updated")
            return app

        self.fetch_all()
        return saved

    def _cached(self, app_id: Optional[int]) -> Optional[JobApplication]:
        if app_id is None:
            return None
        return next((cached for cached in self.applications if cached.id == app_id), None)

    def _is_cached(self, app: JobApplication) -> bool:
        return self._cached(app.id) is not None

    # Guards
    def get_status(self, app: JobApplication) -> str:
        return app.status

    def can_transition(self, app: JobApplication) -> bool:
        """False once an application has been accepted or rejected"""
        parsed = app.parsed_status
        return parsed is None or not parsed.is_terminal

    def can_advance_to_interview(self, app: JobApplication, new_level: int) -> bool:
        """Interview rounds may repeat or move forward, never back"""
        if app.status == StatusKind.APPLIED.value:
            return True

        parsed = app.parsed_status
        if parsed is not None and parsed.is_interview:
            return parsed.level <= new_level
        return False
