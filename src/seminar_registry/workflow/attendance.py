"""Attendance Tracker - per-registration attendance records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from seminar_registry.entity_store.models import Attendance, Registration, utcnow
from seminar_registry.workflow import rules

if TYPE_CHECKING:
    from seminar_registry.entity_store import EntityStore

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """Records whether a registered participant attended.

    Each registration has at most one attendance row. Marking attendance again
    updates that row in place.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def record(self, registration_id: int, attended: bool) -> Attendance:
        """Mark a registration as attended or absent.

        Args:
            registration_id: The registration being marked.
            attended: Whether the participant attended.

        Returns:
            The inserted or updated Attendance row.

        Raises:
            RegistrationNotFoundError: Registration doesn't exist.
            InvalidRegistrationStateError: Registration is not approved or paid.
        """
        with self.store.transaction() as tx:
            registration = tx.get(Registration, registration_id, for_update=True)
            rules.ensure_can_record_attendance(registration)

            existing = tx.find(
                Attendance, Attendance.registration_id == registration_id, for_update=True
            )
            if existing:
                attendance = tx.update(
                    Attendance,
                    existing[0].id,
                    attended=attended,
                    attendance_date=utcnow(),
                )
                action = "updated"
            else:
                attendance = tx.insert(
                    Attendance,
                    registration_id=registration_id,
                    attended=attended,
                    attendance_date=utcnow(),
                )
                action = "recorded"

        logger.info(
            "Attendance %s for registration %s: attended=%s", action, registration_id, attended
        )
        return attendance  # type: ignore[return-value]

    def get_by_registration(self, registration_id: int) -> Attendance | None:
        """Get the attendance row for a registration, or None if none is recorded."""
        rows = self.store.find(Attendance, Attendance.registration_id == registration_id)
        return rows[0] if rows else None

    def list_by_seminar(self, seminar_id: int) -> list[Attendance]:
        """List attendance rows for every registration of a seminar."""
        stmt = (
            select(Attendance)
            .join(Registration, Attendance.registration_id == Registration.id)
            .where(Registration.seminar_id == seminar_id)
            .order_by(Attendance.id)
        )
        return [row[0] for row in self.store.query(stmt)]
