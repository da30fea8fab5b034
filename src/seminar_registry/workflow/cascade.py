"""Cascade Deletion - remove a seminar and everything that hangs off it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seminar_registry.entity_store.models import (
    Attendance,
    Certificate,
    Registration,
    Seminar,
)

if TYPE_CHECKING:
    from seminar_registry.entity_store import EntityStore

logger = logging.getLogger(__name__)


class CascadeDeleter:
    """Deletes seminars together with their dependent rows.

    Children go before parents (certificates and attendance, then
    registrations, then the seminar) so foreign keys hold at every step.
    Users are never deleted here.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def delete_seminar(self, seminar_id: int) -> bool:
        """Delete a seminar with its registrations, attendance and certificates.

        Args:
            seminar_id: The seminar to delete.

        Returns:
            True if the seminar was deleted, False if it doesn't exist.
        """
        with self.store.transaction() as tx:
            seminar = tx.get(Seminar, seminar_id, for_update=True)
            if seminar is None:
                return False

            registrations = tx.find(
                Registration, Registration.seminar_id == seminar_id, for_update=True
            )
            registration_ids = [r.id for r in registrations]

            certificates = attendance = 0
            if registration_ids:
                certificates = tx.delete_where(
                    Certificate, Certificate.registration_id.in_(registration_ids)
                )
                attendance = tx.delete_where(
                    Attendance, Attendance.registration_id.in_(registration_ids)
                )
                tx.delete_where(Registration, Registration.seminar_id == seminar_id)

            tx.delete(Seminar, seminar_id)

        logger.info(
            "Seminar %s deleted with %d registrations, %d attendance rows, %d certificates",
            seminar_id,
            len(registration_ids),
            attendance,
            certificates,
        )
        return True
