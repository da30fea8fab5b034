"""Certificate Issuer - idempotent certificate issuance."""

from __future__ import annotations

import logging
import secrets
import time
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from seminar_registry.entity_store.models import (
    Attendance,
    Certificate,
    Registration,
    Seminar,
    User,
    utcnow,
)
from seminar_registry.workflow import rules
from seminar_registry.workflow.models import CertificateDetails

if TYPE_CHECKING:
    from seminar_registry.entity_store import EntityStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/certificates"


def build_certificate_url(registration_id: int, base_path: str = DEFAULT_BASE_PATH) -> str:
    """Build a unique certificate path for a registration.

    Combines the registration id, a nanosecond timestamp and a random suffix,
    so two issuances never share a URL even within one clock tick.
    """
    return f"{base_path}/cert_{registration_id}_{time.time_ns()}_{secrets.token_hex(4)}.txt"


class CertificateIssuer:
    """Issues certificates to participants who attended their seminar.

    Issuance is idempotent: a registration gets at most one certificate, and
    asking again returns the one already on record.
    """

    def __init__(self, store: EntityStore, base_path: str = DEFAULT_BASE_PATH) -> None:
        """Initialize the issuer.

        Args:
            store: EntityStore used for all reads and writes.
            base_path: Prefix for generated certificate URLs.
        """
        self.store = store
        self.base_path = base_path.rstrip("/")

    def issue(self, registration_id: int) -> Certificate:
        """Issue a certificate for a registration, or return the existing one.

        Args:
            registration_id: The registration to certify.

        Returns:
            The new or previously issued Certificate.

        Raises:
            RegistrationNotFoundError: Registration (or its seminar/participant) doesn't exist.
            InvalidRegistrationStateError: Registration is pending, rejected or cancelled.
            DidNotAttendError: Attendance is missing or marked absent.
        """
        try:
            return self._issue(registration_id)
        except IntegrityError:
            # Lost a race on the unique registration_id; the winner's row stands
            existing = self.get_by_registration(registration_id)
            if existing is None:
                raise
            logger.info(
                "Certificate for registration %s was issued concurrently; returning it",
                registration_id,
            )
            return existing

    def _issue(self, registration_id: int) -> Certificate:
        with self.store.transaction() as tx:
            stmt = (
                select(Registration, Seminar, User)
                .join(Seminar, Registration.seminar_id == Seminar.id)
                .join(User, Registration.participant_id == User.id)
                .where(Registration.id == registration_id)
                .with_for_update()
            )
            rows = tx.query(stmt)
            registration = rows[0][0] if rows else None

            attendance_rows = tx.find(Attendance, Attendance.registration_id == registration_id)
            attendance = attendance_rows[0] if attendance_rows else None

            rules.ensure_can_issue_certificate(registration, attendance)

            existing = tx.find(Certificate, Certificate.registration_id == registration_id)
            if existing:
                logger.debug(
                    "Certificate %s already issued for registration %s",
                    existing[0].id,
                    registration_id,
                )
                return existing[0]

            certificate = tx.insert(
                Certificate,
                registration_id=registration_id,
                certificate_url=build_certificate_url(registration_id, self.base_path),
                issue_date=utcnow(),
            )

        seminar, participant = rows[0][1], rows[0][2]
        logger.info(
            "Certificate %s issued to %s for seminar %s (registration %s)",
            certificate.id,
            participant.id,
            seminar.id,
            registration_id,
        )
        return certificate

    def get_by_registration(self, registration_id: int) -> Certificate | None:
        """Get the certificate for a registration, or None if none was issued."""
        rows = self.store.find(Certificate, Certificate.registration_id == registration_id)
        return rows[0] if rows else None

    def list_all(self) -> list[CertificateDetails]:
        """List all certificates with seminar and participant details."""
        stmt = (
            select(Certificate, Registration, Seminar, User)
            .join(Registration, Certificate.registration_id == Registration.id)
            .join(Seminar, Registration.seminar_id == Seminar.id)
            .join(User, Registration.participant_id == User.id)
            .order_by(Certificate.id)
        )
        return [
            CertificateDetails(
                id=certificate.id,
                registration_id=certificate.registration_id,
                issue_date=certificate.issue_date,
                certificate_url=certificate.certificate_url,
                created_at=certificate.created_at,
                seminar_id=seminar.id,
                seminar_title=seminar.title,
                participant_id=user.id,
                participant_name=user.name,
            )
            for certificate, _registration, seminar, user in self.store.query(stmt)
        ]
