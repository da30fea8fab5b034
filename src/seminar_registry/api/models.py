"""Pydantic models for REST API."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from seminar_registry.entity_store.models import (
    RegistrationStatus,
    RegistrationType,
    UserRole,
)

T = TypeVar("T")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Response model for the healthcheck."""

    status: str
    timestamp: datetime


# User models


class UserCreate(BaseModel):
    """Request model for creating a user."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    role: UserRole
    password: str = Field(..., min_length=6, max_length=72)


class UserUpdate(BaseModel):
    """Request model for updating a user (partial update)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    role: UserRole | None = None
    password: str | None = Field(default=None, min_length=6, max_length=72)


class UserResponse(BaseModel):
    """Response model for a user. The password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: datetime


def user_to_response(user: Any) -> UserResponse:
    """Convert a User model to UserResponse."""
    return UserResponse.model_validate(user)


# Seminar models


class SeminarCreate(BaseModel):
    """Request model for creating a seminar."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    date: datetime
    time: str = Field(..., max_length=20)
    location: str = Field(..., min_length=1, max_length=500)
    speaker_id: int
    capacity: int = Field(..., gt=0)
    cost: Decimal | None = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    registration_type: RegistrationType = RegistrationType.FREE


class SeminarUpdate(BaseModel):
    """Request model for updating a seminar (partial update).

    Send ``"cost": null`` to make a seminar free of charge; omit it to leave
    the cost unchanged.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    date: datetime | None = None
    time: str | None = Field(default=None, max_length=20)
    location: str | None = Field(default=None, min_length=1, max_length=500)
    speaker_id: int | None = None
    capacity: int | None = Field(default=None, gt=0)
    cost: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    registration_type: RegistrationType | None = None


class SeminarResponse(BaseModel):
    """Response model for a seminar."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    date: datetime
    time: str
    location: str
    speaker_id: int
    capacity: int
    cost: Decimal | None
    registration_type: str
    created_at: datetime


def seminar_to_response(seminar: Any) -> SeminarResponse:
    """Convert a Seminar model to SeminarResponse."""
    return SeminarResponse.model_validate(seminar)


# Registration models


class RegistrationCreate(BaseModel):
    """Request model for creating a registration.

    ``status`` is accepted for compatibility but the seminar's registration
    type always decides the initial status.
    """

    seminar_id: int
    participant_id: int
    status: RegistrationStatus | None = None


class RegistrationStatusUpdate(BaseModel):
    """Request model for setting a registration's status."""

    status: RegistrationStatus


class RegistrationResponse(BaseModel):
    """Response model for a registration."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    seminar_id: int
    participant_id: int
    registration_date: datetime
    status: str
    created_at: datetime


def registration_to_response(registration: Any) -> RegistrationResponse:
    """Convert a Registration model to RegistrationResponse."""
    return RegistrationResponse.model_validate(registration)


class RegistrationDetailsResponse(RegistrationResponse):
    """Response model for a registration with seminar and participant details."""

    seminar_title: str
    seminar_date: datetime
    seminar_location: str
    seminar_cost: Decimal | None
    participant_name: str
    participant_email: str


def registration_details_to_response(details: Any) -> RegistrationDetailsResponse:
    """Convert a RegistrationDetails projection to RegistrationDetailsResponse."""
    return RegistrationDetailsResponse.model_validate(details)


# Attendance models


class AttendanceUpdate(BaseModel):
    """Request model for recording attendance."""

    attended: bool


class AttendanceResponse(BaseModel):
    """Response model for an attendance record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    registration_id: int
    attended: bool
    attendance_date: datetime
    created_at: datetime


def attendance_to_response(attendance: Any) -> AttendanceResponse:
    """Convert an Attendance model to AttendanceResponse."""
    return AttendanceResponse.model_validate(attendance)


# Certificate models


class CertificateResponse(BaseModel):
    """Response model for a certificate."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    registration_id: int
    issue_date: datetime
    certificate_url: str
    created_at: datetime


def certificate_to_response(certificate: Any) -> CertificateResponse:
    """Convert a Certificate model to CertificateResponse."""
    return CertificateResponse.model_validate(certificate)


class CertificateDetailsResponse(CertificateResponse):
    """Response model for a certificate with seminar and participant details."""

    seminar_id: int
    seminar_title: str
    participant_id: int
    participant_name: str


def certificate_details_to_response(details: Any) -> CertificateDetailsResponse:
    """Convert a CertificateDetails projection to CertificateDetailsResponse."""
    return CertificateDetailsResponse.model_validate(details)
