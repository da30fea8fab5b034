"""Workflow package - registration lifecycle, eligibility, attendance and certificates."""

from seminar_registry.workflow.attendance import AttendanceTracker
from seminar_registry.workflow.cascade import CascadeDeleter
from seminar_registry.workflow.catalog import SeminarCatalog, UserDirectory
from seminar_registry.workflow.certificates import CertificateIssuer, build_certificate_url
from seminar_registry.workflow.exceptions import (
    CapacityExceededError,
    ConflictError,
    DidNotAttendError,
    DuplicateRegistrationError,
    InvalidRegistrationStateError,
    InvalidRoleError,
    NotFoundError,
    ParticipantNotFoundError,
    RegistrationNotFoundError,
    RegistryError,
    SeminarNotFoundError,
    SpeakerNotFoundError,
    UserInUseError,
    UserNotFoundError,
    ValidationFailure,
)
from seminar_registry.workflow.models import CertificateDetails, RegistrationDetails
from seminar_registry.workflow.registrations import RegistrationWorkflow
from seminar_registry.workflow.registry import SeminarRegistry

__all__ = [
    "AttendanceTracker",
    "CapacityExceededError",
    "CascadeDeleter",
    "CertificateDetails",
    "CertificateIssuer",
    "ConflictError",
    "DidNotAttendError",
    "DuplicateRegistrationError",
    "InvalidRegistrationStateError",
    "InvalidRoleError",
    "NotFoundError",
    "ParticipantNotFoundError",
    "RegistrationDetails",
    "RegistrationNotFoundError",
    "RegistrationWorkflow",
    "RegistryError",
    "SeminarCatalog",
    "SeminarNotFoundError",
    "SeminarRegistry",
    "SpeakerNotFoundError",
    "UserDirectory",
    "UserInUseError",
    "UserNotFoundError",
    "ValidationFailure",
    "build_certificate_url",
]
