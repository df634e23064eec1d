"""
Database utilities - SQLite with SQLAlchemy ORM
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
from contextlib import contextmanager

from sqlalchemy import (
    create_engine,
    func,
    select,
    Column,
    String,
    Integer,
    Boolean,
    DateTime,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool

from jobtracker.core.application import JobApplication, StatusKind
from jobtracker.core.exceptions import FetchError, SaveError
from jobtracker.core.filters import ApplicationFilter, SortOrder
from jobtracker.utils.logger import logger

Base = declarative_base()

UPDATABLE_FIELDS = {"status", "is_favourite", "important_date", "reminded_at"}


class ApplicationModel(Base):
    """SQLAlchemy model for JobApplication"""
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    date_applied = Column(DateTime, nullable=False)
    status = Column(String, nullable=False, default=StatusKind.APPLIED.value)
    is_favourite = Column(Boolean, nullable=False, default=False)
    important_date = Column(DateTime)
    reminded_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.now)

    def to_application(self) -> JobApplication:
        """Convert to JobApplication model"""
        return JobApplication(
            id=self.id,
            company=self.company,
            title=self.title,
            date_applied=self.date_applied,
            status=self.status or StatusKind.APPLIED.value,
            is_favourite=bool(self.is_favourite),
            important_date=self.important_date,
            reminded_at=self.reminded_at,
        )

    @classmethod
    def from_application(cls, app: JobApplication) -> "ApplicationModel":
        """Create from JobApplication model"""
        return cls(
            id=app.id,
            company=app.company,
            title=app.title,
            date_applied=app.date_applied,
            status=app.status,
            is_favourite=app.is_favourite,
            important_date=app.important_date,
            reminded_at=app.reminded_at,
        )


class Database:
    """
    Persistent store for tracked applications.

    Read failures raise FetchError and write failures raise SaveError;
    the underlying SQLAlchemy error is chained.
    """

    def __init__(self, db_path: str = "data/applications.db", echo: bool = False):
        engine_args = {}
        if db_path == ":memory:":
            # One shared connection, otherwise every session sees an empty database
            url = "sqlite://"
            engine_args["poolclass"] = StaticPool
        else:
            self.db_path = Path(db_path)
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            url = f"sqlite:///{self.db_path}"

        self.engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            **engine_args,
        )
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

        # Create tables
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Session:
        """Get a database session"""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def _reading(self, action: str):
        try:
            with self.session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Error when fetching ({action}): {e}")
            raise FetchError(f"Could not {action}") from e

    @contextmanager
    def _writing(self, action: str):
        try:
            with self.session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Error when saving ({action}): {e}")
            raise SaveError(f"Could not {action}") from e

    # Read operations
    def list_applications(
        self,
        app_filter: ApplicationFilter = ApplicationFilter.NONE,
        sort: Optional[SortOrder] = None,
    ) -> list[JobApplication]:
        """List applications matching a filter, in insertion order unless sorted"""
        stmt = select(ApplicationModel)
        clause = app_filter.clause(ApplicationModel)
        if clause is not None:
            stmt = stmt.where(clause)
        if sort is not None:
            stmt = stmt.order_by(*sort.order_by(ApplicationModel))
        else:
            stmt = stmt.order_by(ApplicationModel.id)

        with self._reading("list applications") as session:
            return [row.to_application() for row in session.scalars(stmt)]

    def find_by_company(self, company: str) -> list[JobApplication]:
        """All applications to exactly this company"""
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.company == company)
            .order_by(ApplicationModel.id)
        )
        with self._reading(f"search for {company!r}") as session:
            return [row.to_application() for row in session.scalars(stmt)]

    def get_application(self, app_id: int) -> Optional[JobApplication]:
        """Get an application by ID"""
        with self._reading(f"load application {app_id}") as session:
            row = session.get(ApplicationModel, app_id)
            return row.to_application() if row else None

    def get_stats(self) -> dict:
        """Count applications per stage"""
        with self._reading("count applications") as session:
            def count(*criteria) -> int:
                stmt = select(func.count(ApplicationModel.id))
                if criteria:
                    stmt = stmt.where(*criteria)
                return session.scalar(stmt) or 0

            return {
                "total": count(),
                "favourites": count(ApplicationFilter.FAVOURITE.clause(ApplicationModel)),
                "applied": count(ApplicationFilter.APPLIED.clause(ApplicationModel)),
                "interview": count(ApplicationFilter.INTERVIEW.clause(ApplicationModel)),
                "accepted": count(ApplicationFilter.ACCEPTED.clause(ApplicationModel)),
                "rejected": count(ApplicationFilter.REJECTED.clause(ApplicationModel)),
            }

    # Write operations
    def add_application(self, app: JobApplication) -> int:
        """Insert an application and return its new ID"""
        with self._writing(f"add application to {app.company}") as session:
            row = ApplicationModel.from_application(app)
            row.id = None
            session.add(row)
            session.flush()
            app_id = row.id

        app.id = app_id
        return app_id

    def update_application(self, app_id: int, **changes) -> Optional[JobApplication]:
        """
        Write only the given fields and return the stored record,
        or None if the row no longer exists.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        with self._writing(f"update application {app_id}") as session:
            row = session.get(ApplicationModel, app_id) if app_id is not None else None
            if row is None:
                return None
            for name, value in changes.items():
                setattr(row, name, value)
            session.flush()
            return row.to_application()

    def toggle_favourite(self, app_id: int) -> Optional[JobApplication]:
        """Flip the stored favourite flag. Returns None if the row no longer exists."""
        with self._writing(f"toggle favourite on application {app_id}") as session:
            row = session.get(ApplicationModel, app_id) if app_id is not None else None
            if row is None:
                return None
            row.is_favourite = not row.is_favourite
            session.flush()
            return row.to_application()

    def delete_application(self, app_id: int) -> bool:
        """Delete an application. Returns False if it was already gone."""
        with self._writing(f"delete application {app_id}") as session:
            row = session.get(ApplicationModel, app_id)
            if row is None:
                return False
            session.delete(row)
            return True


# Global database instance
_db: Optional[Database] = None


def get_db() -> Database:
    """Get the global database instance"""
    global _db
    if _db is None:
        from jobtracker.utils.config import get_settings
        settings = get_settings()
        _db = Database(
            db_path=settings.database.path,
            echo=settings.database.echo
        )
    return _db
