"""Registration Workflow - registration lifecycle state machine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from seminar_registry.entity_store.models import (
    Registration,
    RegistrationStatus,
    Seminar,
    User,
    utcnow,
)
from seminar_registry.workflow import rules
from seminar_registry.workflow.models import RegistrationDetails

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from seminar_registry.entity_store import EntityStore

logger = logging.getLogger(__name__)


class RegistrationWorkflow:
    """Creates registrations and drives their status.

    A registration's first status is always derived from its seminar's
    registration type. After that, administrators may move it to any status;
    no transition graph is enforced. Capacity is checked when a registration
    is created.
    """

    def __init__(self, store: EntityStore) -> None:
        """Initialize the workflow.

        Args:
            store: EntityStore used for all reads and writes.
        """
        self.store = store

    def create(
        self,
        seminar_id: int,
        participant_id: int,
        requested_status: RegistrationStatus | str | None = None,
    ) -> Registration:
        """Register a participant for a seminar.

        The eligibility check and the insert share one transaction, so two
        concurrent callers cannot both take the last seat.

        Args:
            seminar_id: The seminar to register for.
            participant_id: The registering user; must have the participant role.
            requested_status: Status asked for by the caller. Ignored; the
                seminar's registration type decides.

        Returns:
            The created Registration.

        Raises:
            ParticipantNotFoundError: Participant doesn't exist.
            InvalidRoleError: User is not a participant.
            SeminarNotFoundError: Seminar doesn't exist.
            DuplicateRegistrationError: An active registration already exists.
            CapacityExceededError: The seminar is full.
        """
        with self.store.transaction() as tx:
            participant = tx.get(User, participant_id)
            seminar = tx.get(Seminar, seminar_id, for_update=True)
            existing = tx.find(
                Registration, Registration.seminar_id == seminar_id, for_update=True
            )

            rules.ensure_can_register(participant, seminar, existing)

            status = rules.initial_status(seminar)
            if requested_status is not None and requested_status != status:
                logger.debug(
                    "Ignoring requested status %s for seminar %s (%s registration)",
                    requested_status,
                    seminar_id,
                    seminar.registration_type,
                )

            registration = tx.insert(
                Registration,
                seminar_id=seminar_id,
                participant_id=participant_id,
                status=status.value,
                registration_date=utcnow(),
            )

        logger.info(
            "Registration %s created: participant %s -> seminar %s (%s)",
            registration.id,
            participant_id,
            seminar_id,
            registration.status,
        )
        return registration

    def get(self, registration_id: int) -> Registration | None:
        """Get a registration by ID, or None if it doesn't exist."""
        return self.store.get(Registration, registration_id)

    def update_status(
        self, registration_id: int, status: RegistrationStatus | str
    ) -> Registration | None:
        """Overwrite a registration's status.

        Args:
            registration_id: The registration to update.
            status: Any registration status.

        Returns:
            The updated Registration, or None if it doesn't exist.
        """
        new_status = RegistrationStatus(status)
        with self.store.transaction() as tx:
            registration = tx.update(Registration, registration_id, status=new_status.value)

        if registration is None:
            logger.debug("Status update for missing registration %s", registration_id)
            return None

        logger.info("Registration %s status set to %s", registration_id, new_status.value)
        return registration

    def cancel(self, registration_id: int) -> bool:
        """Cancel a registration, freeing its seat.

        Cancelling an already-cancelled registration succeeds.

        Returns:
            True if the registration exists, False otherwise.
        """
        registration = self.update_status(registration_id, RegistrationStatus.CANCELLED)
        return registration is not None

    def list_all(self) -> list[RegistrationDetails]:
        """List every registration with seminar and participant details."""
        return self._list_details()

    def list_by_seminar(self, seminar_id: int) -> list[RegistrationDetails]:
        """List registrations for one seminar."""
        return self._list_details(Registration.seminar_id == seminar_id)

    def list_by_participant(self, participant_id: int) -> list[RegistrationDetails]:
        """List registrations held by one participant."""
        return self._list_details(Registration.participant_id == participant_id)

    def _list_details(self, *criteria: ColumnElement[bool]) -> list[RegistrationDetails]:
        stmt = (
            select(Registration, Seminar, User)
            .join(Seminar, Registration.seminar_id == Seminar.id)
            .join(User, Registration.participant_id == User.id)
            .where(*criteria)
            .order_by(Registration.id)
        )
        rows = self.store.query(stmt)
        return [_to_details(registration, seminar, user) for registration, seminar, user in rows]


def _to_details(registration: Registration, seminar: Seminar, user: User) -> RegistrationDetails:
    return RegistrationDetails(
        id=registration.id,
        seminar_id=registration.seminar_id,
        participant_id=registration.participant_id,
        registration_date=registration.registration_date,
        status=registration.status,
        created_at=registration.created_at,
        seminar_title=seminar.title,
        seminar_date=seminar.date,
        seminar_location=seminar.location,
        seminar_cost=seminar.cost,
        participant_name=user.name,
        participant_email=user.email,
    )
