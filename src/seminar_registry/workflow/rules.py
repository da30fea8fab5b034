"""Eligibility rules for registrations, attendance and certificates.

Pure functions over already-loaded entities. Each ``ensure_*`` check returns
None when the operation is allowed and raises a typed workflow error otherwise.
Callers load the inputs inside the same transaction that performs the write.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from seminar_registry.entity_store.models import (
    RegistrationStatus,
    RegistrationType,
    UserRole,
)
from seminar_registry.workflow.exceptions import (
    CapacityExceededError,
    DidNotAttendError,
    DuplicateRegistrationError,
    InvalidRegistrationStateError,
    InvalidRoleError,
    ParticipantNotFoundError,
    RegistrationNotFoundError,
    SeminarNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from seminar_registry.entity_store.models import (
        Attendance,
        Registration,
        Seminar,
        User,
    )

# Statuses that occupy a seat
CONFIRMED_STATUSES = frozenset(
    {RegistrationStatus.APPROVED.value, RegistrationStatus.PAID.value}
)

# Statuses that may never receive a certificate
NON_CERTIFIABLE_STATUSES = frozenset(
    {
        RegistrationStatus.PENDING.value,
        RegistrationStatus.REJECTED.value,
        RegistrationStatus.CANCELLED.value,
    }
)


def count_confirmed(registrations: Iterable[Registration]) -> int:
    """Count registrations holding a seat (approved or paid)."""
    return sum(1 for r in registrations if r.status in CONFIRMED_STATUSES)


def ensure_can_register(
    participant: User | None,
    seminar: Seminar | None,
    existing_registrations: Iterable[Registration],
) -> None:
    """Check that a participant may register for a seminar.

    Args:
        participant: The resolved participant, or None if the id did not resolve.
        seminar: The resolved seminar, or None if the id did not resolve.
        existing_registrations: Every registration of the seminar, any status.

    Raises:
        ParticipantNotFoundError: Participant is None.
        InvalidRoleError: User is not a participant.
        SeminarNotFoundError: Seminar is None.
        DuplicateRegistrationError: Participant already has a non-cancelled
            registration for the seminar.
        CapacityExceededError: Approved and paid registrations fill the seminar.
    """
    if participant is None:
        raise ParticipantNotFoundError("Participant not found")
    if participant.role != UserRole.PARTICIPANT:
        raise InvalidRoleError(
            f"User {participant.id} must have participant role (role: {participant.role})"
        )
    if seminar is None:
        raise SeminarNotFoundError("Seminar not found")

    registrations = [r for r in existing_registrations if r.seminar_id == seminar.id]

    # Cancelled registrations neither block re-registration nor hold a seat
    for registration in registrations:
        if (
            registration.participant_id == participant.id
            and registration.status != RegistrationStatus.CANCELLED
        ):
            raise DuplicateRegistrationError(
                f"Participant {participant.id} is already registered for seminar {seminar.id}"
            )

    if count_confirmed(registrations) >= seminar.capacity:
        raise CapacityExceededError(
            f"Seminar {seminar.id} is at capacity ({seminar.capacity})"
        )


def initial_status(seminar: Seminar) -> RegistrationStatus:
    """Status a new registration starts in.

    Free seminars approve immediately. Seminars requiring approval or payment
    start registrations as pending until an administrator acts.
    """
    if seminar.registration_type == RegistrationType.FREE:
        return RegistrationStatus.APPROVED
    return RegistrationStatus.PENDING


def ensure_can_record_attendance(registration: Registration | None) -> None:
    """Check that attendance may be recorded for a registration.

    Raises:
        RegistrationNotFoundError: Registration is None.
        InvalidRegistrationStateError: Status is not approved or paid.
    """
    if registration is None:
        raise RegistrationNotFoundError("Registration not found")
    if registration.status not in CONFIRMED_STATUSES:
        raise InvalidRegistrationStateError(
            "Registration must be approved or paid to track attendance "
            f"(status: {registration.status})"
        )


def ensure_can_issue_certificate(
    registration: Registration | None,
    attendance: Attendance | None,
) -> None:
    """Check that a certificate may be issued for a registration.

    Raises:
        RegistrationNotFoundError: Registration is None.
        InvalidRegistrationStateError: Status is pending, rejected or cancelled.
        DidNotAttendError: No attendance row, or attendance marked absent.
    """
    if registration is None:
        raise RegistrationNotFoundError("Registration not found")
    if registration.status in NON_CERTIFIABLE_STATUSES:
        raise InvalidRegistrationStateError(
            f"Cannot issue certificate for {registration.status} registration"
        )
    if attendance is None or not attendance.attended:
        raise DidNotAttendError(
            f"Participant did not attend the seminar for registration {registration.id}"
        )
