"""Relational data models for the time ledger."""

import datetime
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for all ledger tables."""

    pass


class Consultant(Base):
    """A person who logs hours.

    Attributes:
        id: Primary key
        name: Unique display name (natural key, case-sensitive)
        active: Whether the consultant is active
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "consultants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=datetime.datetime.now)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"Consultant(id={self.id!r}, name={self.name!r})"


class Customer(Base):
    """A client that owns projects.

    Attributes:
        id: Primary key
        name: Unique display name (natural key, case-sensitive)
        active: Whether the customer is active
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=datetime.datetime.now)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)

    projects: Mapped[list["Project"]] = relationship(back_populates="customer")

    def __repr__(self) -> str:
        return f"Customer(id={self.id!r}, name={self.name!r})"


class Project(Base):
    """Billable work scoped to one customer.

    The same project name may exist under different customers.

    Attributes:
        id: Primary key
        name: Project name, unique per customer
        customer_id: Owning customer
        active: Whether the project is active
        description: Free-text description (optional)
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "projects"
    __table_args__ = (
        UniqueConstraint("name", "customer_id", name="uq_projects_name_customer"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=datetime.datetime.now)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)

    customer: Mapped[Customer] = relationship(back_populates="projects")

    def __repr__(self) -> str:
        return f"Project(id={self.id!r}, name={self.name!r}, customer_id={self.customer_id!r})"


class TimeEntry(Base):
    """Hours logged by a consultant against a project on one day.

    At most one row exists per merge key (date, consultant, project,
    description, hourly rate); repeated logging accumulates into ``hours``.

    Attributes:
        id: Primary key
        date: Day the work was done (no time-of-day)
        hours: Logged hours, always positive
        description: Work description, matched exactly
        hourly_rate: Billing rate, always positive
        project_id: Project the hours were logged against
        consultant_id: Consultant who did the work
        created_at: Creation timestamp
        updated_at: Set when the entry absorbs a merge, None before that
    """

    __tablename__ = "time_entries"
    __table_args__ = (
        UniqueConstraint(
            "date",
            "consultant_id",
            "project_id",
            "description",
            "hourly_rate",
            name="uq_time_entries_merge_key",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    hourly_rate: Mapped[float] = mapped_column(Float, nullable=False)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id"), nullable=False, index=True
    )
    consultant_id: Mapped[int] = mapped_column(
        ForeignKey("consultants.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=datetime.datetime.now)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)

    project: Mapped[Project] = relationship()
    consultant: Mapped[Consultant] = relationship()

    @property
    def cost(self) -> float:
        """Hours multiplied by hourly rate."""
        return self.hours * self.hourly_rate

    def __repr__(self) -> str:
        return (
            f"TimeEntry(id={self.id!r}, date={self.date!r}, hours={self.hours!r}, "
            f"description={self.description!r})"
        )


@dataclass
class EntryCandidate:
    """A time entry that has not been reconciled against the store yet.

    Attributes:
        date: Day the work was done
        hours: Hours to log (must be positive)
        description: Work description
        hourly_rate: Billing rate (must be positive)
        project_id: Resolved project id
        consultant_id: Resolved consultant id
    """

    date: datetime.date
    hours: float
    description: str
    hourly_rate: float
    project_id: int
    consultant_id: int

    @property
    def merge_key(self) -> tuple[datetime.date, int, int, str, float]:
        """Tuple identifying the row this candidate merges into."""
        return (
            self.date,
            self.consultant_id,
            self.project_id,
            self.description,
            self.hourly_rate,
        )
