"""SQLAlchemy models for the Entity Store."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    TypeDecorator,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
)


class UserRole(StrEnum):
    """User role enum."""

    ADMIN = "admin"
    PARTICIPANT = "participant"
    SPEAKER = "speaker"


class RegistrationType(StrEnum):
    """How a seminar admits new registrations."""

    FREE = "free"
    APPROVAL_REQUIRED = "approval_required"
    PAYMENT_REQUIRED = "payment_required"


class RegistrationStatus(StrEnum):
    """Registration status enum."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"
    CANCELLED = "cancelled"


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching what SQLite hands back."""
    return datetime.now(UTC).replace(tzinfo=None)


class Money(TypeDecorator[Decimal]):
    """Exact decimal amount stored as integer cents.

    SQLite has no decimal type and binds ``Numeric`` as a float, so amounts
    are scaled to an integer on the way in and back to a two-place
    ``Decimal`` on the way out. Values with more than two decimal places
    are refused rather than rounded.
    """

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> int | None:
        if value is None:
            return None
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        cents = amount.scaleb(2)
        if cents != cents.to_integral_value():
            raise ValueError(f"Amount {value!r} has more than two decimal places")
        return int(cents)

    def process_result_value(self, value: Any, dialect: Any) -> Decimal | None:
        if value is None:
            return None
        return Decimal(value).scaleb(-2)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """User model - admins, participants and speakers."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        name: str,
        email: str,
        role: str,
        password: str,
        id: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.name = name
        self.email = email
        self.role = UserRole(role).value
        self.password = password

    @property
    def user_role(self) -> UserRole:
        """Get role as UserRole enum."""
        return UserRole(self.role)

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r}, role={self.role!r})>"


class Seminar(Base):
    """Seminar model - a scheduled session with a speaker and limited seats."""

    __tablename__ = "seminars"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    time: Mapped[str] = mapped_column(String(20), nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    speaker_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    cost: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    registration_type: Mapped[str] = mapped_column(String(30), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        title: str,
        date: datetime,
        time: str,
        location: str,
        speaker_id: int,
        capacity: int,
        id: int | None = None,
        description: str = "",
        cost: Decimal | None = None,
        registration_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.title = title
        self.description = description
        self.date = date
        self.time = time
        self.location = location
        self.speaker_id = speaker_id
        self.capacity = capacity
        self.cost = cost
        self.registration_type = (
            RegistrationType(registration_type).value
            if registration_type is not None
            else RegistrationType.FREE.value
        )

    @property
    def seminar_registration_type(self) -> RegistrationType:
        """Get registration_type as RegistrationType enum."""
        return RegistrationType(self.registration_type)

    def __repr__(self) -> str:
        return f"<Seminar(id={self.id!r}, title={self.title!r}, capacity={self.capacity!r})>"


class Registration(Base):
    """Registration model - links a participant to a seminar."""

    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seminar_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("seminars.id"), nullable=False, index=True
    )
    participant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    registration_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        seminar_id: int,
        participant_id: int,
        id: int | None = None,
        status: str | None = None,
        registration_date: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.seminar_id = seminar_id
        self.participant_id = participant_id
        self.status = (
            RegistrationStatus(status).value
            if status is not None
            else RegistrationStatus.PENDING.value
        )
        self.registration_date = registration_date if registration_date is not None else utcnow()

    @property
    def registration_status(self) -> RegistrationStatus:
        """Get status as RegistrationStatus enum."""
        return RegistrationStatus(self.status)

    @registration_status.setter
    def registration_status(self, value: RegistrationStatus) -> None:
        """Set status from RegistrationStatus enum."""
        self.status = value.value

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id!r}, seminar_id={self.seminar_id!r}, "
            f"participant_id={self.participant_id!r}, status={self.status!r})>"
        )


class Attendance(Base):
    """Attendance model - at most one row per registration."""

    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    registration_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("registrations.id"), nullable=False, unique=True
    )
    attended: Mapped[bool] = mapped_column(Boolean, nullable=False)
    attendance_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        registration_id: int,
        attended: bool,
        id: int | None = None,
        attendance_date: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.registration_id = registration_id
        self.attended = attended
        self.attendance_date = attendance_date if attendance_date is not None else utcnow()

    def __repr__(self) -> str:
        return (
            f"<Attendance(id={self.id!r}, registration_id={self.registration_id!r}, "
            f"attended={self.attended!r})>"
        )


class Certificate(Base):
    """Certificate model - at most one per registration."""

    __tablename__ = "certificates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    registration_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("registrations.id"), nullable=False, unique=True
    )
    issue_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    certificate_url: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        registration_id: int,
        certificate_url: str,
        id: int | None = None,
        issue_date: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if id is not None:
            self.id = id
        self.registration_id = registration_id
        self.certificate_url = certificate_url
        self.issue_date = issue_date if issue_date is not None else utcnow()

    def __repr__(self) -> str:
        return (
            f"<Certificate(id={self.id!r}, registration_id={self.registration_id!r}, "
            f"certificate_url={self.certificate_url!r})>"
        )
