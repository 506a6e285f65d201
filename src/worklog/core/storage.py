"""Relational storage for consultants, customers, projects and time entries."""

import datetime
import logging
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import Engine, create_engine, event, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, sessionmaker

from worklog.core.errors import StoreError
from worklog.core.models import (
    Base,
    Consultant,
    Customer,
    EntryCandidate,
    Project,
    TimeEntry,
)

logger = logging.getLogger(__name__)

MERGE_KEY_COLUMNS = ["date", "consultant_id", "project_id", "description", "hourly_rate"]

# Dialects with INSERT ... ON CONFLICT support
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class StorageManager:
    """Manages the relational ledger store.

    Every public operation runs in its own transaction. Natural-key lookups
    and entry merges use INSERT ... ON CONFLICT so concurrent invocations
    cannot create duplicate rows.
    """

    def __init__(self, url: str, echo: bool = False):
        """Connect to the store and create missing tables.

        Args:
            url: SQLAlchemy database URL
            echo: Log every SQL statement

        Raises:
            StoreError: If the store cannot be reached
        """
        self.url = url
        try:
            sa_url = make_url(url)
            if sa_url.get_backend_name() == "sqlite" and sa_url.database not in (None, "", ":memory:"):
                Path(sa_url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(url, echo=echo)
            if self.engine.dialect.name == "sqlite":
                event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
            Base.metadata.create_all(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError("store.connect", e) from e

        self._sessions = sessionmaker(self.engine, expire_on_commit=False)
        logger.info(f"Database ready ({self.dialect})")

    @property
    def dialect(self) -> str:
        """Name of the SQL dialect in use."""
        return self.engine.dialect.name

    def session(self) -> Session:
        """Open a new ORM session."""
        return self._sessions()

    def close(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    # Entity operations

    def get_or_create_consultant(self, name: str) -> Consultant:
        """Return the consultant with this name, creating it on first use.

        Args:
            name: Consultant name (exact match)

        Returns:
            Persisted Consultant
        """
        return self._get_or_create(
            Consultant, {"name": name}, "store.get_or_create_consultant"
        )

    def get_or_create_customer(self, name: str) -> Customer:
        """Return the customer with this name, creating it on first use.

        Args:
            name: Customer name (exact match)

        Returns:
            Persisted Customer
        """
        return self._get_or_create(Customer, {"name": name}, "store.get_or_create_customer")

    def get_or_create_project(self, name: str, customer_id: int) -> Project:
        """Return the project with this name under the customer, creating it if needed.

        Args:
            name: Project name (exact match)
            customer_id: Owning customer id

        Returns:
            Persisted Project
        """
        return self._get_or_create(
            Project,
            {"name": name, "customer_id": customer_id},
            "store.get_or_create_project",
        )

    def _get_or_create(self, model: Any, key: dict[str, Any], operation: str) -> Any:
        """Insert a row by natural key if missing, then load it.

        Args:
            model: ORM class with a unique constraint over the key columns
            key: Natural key column values
            operation: Catalog key of the operation, used in StoreError

        Returns:
            The existing or newly created row
        """
        insert = _UPSERT_INSERTS.get(self.dialect)
        try:
            with self.session() as session, session.begin():
                if insert is not None:
                    stmt = (
                        insert(model)
                        .values(**key, active=True, created_at=datetime.datetime.now())
                        .on_conflict_do_nothing(index_elements=list(key))
                    )
                    session.execute(stmt)
                    row = session.scalars(select(model).filter_by(**key)).one()
                else:
                    row = session.scalars(
                        select(model).filter_by(**key).with_for_update()
                    ).one_or_none()
                    if row is None:
                        row = model(**key, active=True)
                        session.add(row)
                        session.flush()
                logger.debug(f"{model.__name__} {key} -> id {row.id}")
                return row
        except SQLAlchemyError as e:
            raise StoreError(operation, e) from e

    def list_consultants(self) -> list[Consultant]:
        """All consultants ordered by name."""
        return self._list(Consultant, "store.list_consultants")

    def list_customers(self) -> list[Customer]:
        """All customers ordered by name."""
        return self._list(Customer, "store.list_customers")

    def list_projects(self) -> list[Project]:
        """All projects ordered by name, with their customer loaded."""
        try:
            with self.session() as session:
                stmt = select(Project).options(joinedload(Project.customer)).order_by(Project.name)
                return list(session.scalars(stmt))
        except SQLAlchemyError as e:
            raise StoreError("store.list_projects", e) from e

    def _list(self, model: Any, operation: str) -> list[Any]:
        try:
            with self.session() as session:
                return list(session.scalars(select(model).order_by(model.name)))
        except SQLAlchemyError as e:
            raise StoreError(operation, e) from e

    # Time entry operations

    def upsert_entry(self, candidate: EntryCandidate) -> tuple[TimeEntry, bool]:
        """Insert a time entry or add its hours to the row with the same merge key.

        The check and the write happen in one statement (or, on dialects
        without ON CONFLICT, under a row lock in one transaction).

        Args:
            candidate: Entry to reconcile

        Returns:
            Tuple of (persisted entry, whether it merged into an existing row)

        Raises:
            StoreError: If the write is not confirmed
        """
        insert = _UPSERT_INSERTS.get(self.dialect)
        try:
            with self.session() as session, session.begin():
                if insert is not None:
                    entry_id, merged = self._upsert_on_conflict(session, insert, candidate)
                else:
                    entry_id, merged = self._upsert_locked(session, candidate)
                entry = self._load_entry(session, entry_id)
        except SQLAlchemyError as e:
            raise StoreError("store.save_entry", e) from e

        logger.info(
            f"{'Merged into' if merged else 'Inserted'} time entry {entry.id} "
            f"({entry.date}, {entry.hours:.2f}h)"
        )
        return entry, merged

    def _upsert_on_conflict(
        self, session: Session, insert: Any, candidate: EntryCandidate
    ) -> tuple[int, bool]:
        now = datetime.datetime.now()
        table = TimeEntry.__table__
        stmt = insert(table).values(
            date=candidate.date,
            hours=candidate.hours,
            description=candidate.description,
            hourly_rate=candidate.hourly_rate,
            project_id=candidate.project_id,
            consultant_id=candidate.consultant_id,
            created_at=now,
            updated_at=None,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=MERGE_KEY_COLUMNS,
            set_={
                "hours": table.c.hours + stmt.excluded.hours,
                "updated_at": now,
            },
        ).returning(table.c.id, table.c.updated_at)
        row = session.execute(stmt).one()
        # updated_at is only set by the conflict branch
        return row.id, row.updated_at is not None

    def _upsert_locked(self, session: Session, candidate: EntryCandidate) -> tuple[int, bool]:
        existing = session.scalars(
            select(TimeEntry)
            .where(
                TimeEntry.date == candidate.date,
                TimeEntry.consultant_id == candidate.consultant_id,
                TimeEntry.project_id == candidate.project_id,
                TimeEntry.description == candidate.description,
                TimeEntry.hourly_rate == candidate.hourly_rate,
            )
            .with_for_update()
        ).one_or_none()

        if existing is not None:
            existing.hours = existing.hours + candidate.hours
            existing.updated_at = datetime.datetime.now()
            session.flush()
            return existing.id, True

        entry = TimeEntry(
            date=candidate.date,
            hours=candidate.hours,
            description=candidate.description,
            hourly_rate=candidate.hourly_rate,
            project_id=candidate.project_id,
            consultant_id=candidate.consultant_id,
        )
        session.add(entry)
        session.flush()
        return entry.id, False

    def _load_entry(self, session: Session, entry_id: int) -> TimeEntry:
        stmt = (
            select(TimeEntry)
            .options(
                joinedload(TimeEntry.consultant),
                joinedload(TimeEntry.project).joinedload(Project.customer),
            )
            .where(TimeEntry.id == entry_id)
            .execution_options(populate_existing=True)
        )
        return session.scalars(stmt).one()

    def get_entry(self, entry_id: int) -> Optional[TimeEntry]:
        """Get a time entry by id with related rows loaded.

        Args:
            entry_id: Entry id

        Returns:
            TimeEntry or None if not found
        """
        try:
            with self.session() as session:
                stmt = (
                    select(TimeEntry)
                    .options(
                        joinedload(TimeEntry.consultant),
                        joinedload(TimeEntry.project).joinedload(Project.customer),
                    )
                    .where(TimeEntry.id == entry_id)
                )
                return session.scalars(stmt).one_or_none()
        except SQLAlchemyError as e:
            raise StoreError("store.load_entry", e) from e

    def find_entries(
        self,
        start_date: Optional[datetime.date] = None,
        end_date: Optional[datetime.date] = None,
        consultant: Optional[str] = None,
        project: Optional[str] = None,
        customer: Optional[str] = None,
    ) -> list[TimeEntry]:
        """Load entries matching a filter, oldest first.

        Args:
            start_date: Inclusive lower bound (None for unbounded)
            end_date: Exclusive upper bound (None for unbounded)
            consultant: Exact consultant name
            project: Exact project name (any customer)
            customer: Exact customer name

        Returns:
            Entries with consultant, project and customer loaded
        """
        stmt = (
            select(TimeEntry)
            .join(TimeEntry.consultant)
            .join(TimeEntry.project)
            .join(Project.customer)
            .options(
                joinedload(TimeEntry.consultant),
                joinedload(TimeEntry.project).joinedload(Project.customer),
            )
        )
        if consultant:
            stmt = stmt.where(Consultant.name == consultant)
        if project:
            stmt = stmt.where(Project.name == project)
        if customer:
            stmt = stmt.where(Customer.name == customer)
        if start_date is not None:
            stmt = stmt.where(TimeEntry.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(TimeEntry.date < end_date)
        stmt = stmt.order_by(TimeEntry.date, TimeEntry.id)

        try:
            with self.session() as session:
                entries = list(session.scalars(stmt).unique())
        except SQLAlchemyError as e:
            raise StoreError("store.fetch_entries", e) from e

        logger.debug(f"Fetched {len(entries)} time entries")
        return entries

    def count_entries(self) -> int:
        """Total number of time entry rows."""
        try:
            with self.session() as session:
                return session.scalar(select(func.count()).select_from(TimeEntry)) or 0
        except SQLAlchemyError as e:
            raise StoreError("store.count_entries", e) from e
