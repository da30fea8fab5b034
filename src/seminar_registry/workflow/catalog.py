"""User and seminar administration."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

import bcrypt

from seminar_registry.entity_store.models import (
    Registration,
    RegistrationType,
    Seminar,
    User,
    UserRole,
)
from seminar_registry.workflow.cascade import CascadeDeleter
from seminar_registry.workflow.exceptions import (
    InvalidRoleError,
    SpeakerNotFoundError,
    UserInUseError,
    ValidationFailure,
)

if TYPE_CHECKING:
    from datetime import datetime

    from seminar_registry.entity_store import EntityStore, StoreTransaction

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit
BCRYPT_ROUNDS = 12
COST_PLACES = 2


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailure(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationFailure(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


class UserDirectory:
    """Creates, updates and removes users.

    Passwords are stored as bcrypt hashes. A user referenced by a seminar
    (as speaker) or a registration (as participant) cannot be deleted.
    """

    def __init__(self, store: EntityStore, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        """Initialize the directory.

        Args:
            store: EntityStore used for all reads and writes.
            bcrypt_rounds: bcrypt cost factor for new password hashes.
        """
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    def create(self, name: str, email: str, role: UserRole | str, password: str) -> User:
        """Create a user.

        Raises:
            ValidationFailure: Password is too short.
            EmailExistsError: Another user has this email.
        """
        _check_password(password)
        user = self.store.insert(
            User,
            name=name,
            email=email,
            role=UserRole(role).value,
            password=hash_password(password, self.bcrypt_rounds),
        )
        logger.info("User %s created (role=%s)", user.id, user.role)
        return user

    def get(self, user_id: int) -> User | None:
        """Get a user by ID, or None if it doesn't exist."""
        return self.store.get(User, user_id)

    def list_all(self) -> list[User]:
        """List all users, ordered by ID."""
        return self.store.find(User)

    def list_speakers(self) -> list[User]:
        """List users with the speaker role."""
        return self.store.find(User, User.role == UserRole.SPEAKER.value)

    def update(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        role: UserRole | str | None = None,
        password: str | None = None,
    ) -> User | None:
        """Update user fields. Only provided fields are updated.

        Returns:
            The updated User, or None if it doesn't exist.

        Raises:
            ValidationFailure: New password is too short.
            EmailExistsError: Another user has the new email.
        """
        fields: dict[str, Any] = {}
        if name is not None:
            fields["name"] = name
        if email is not None:
            fields["email"] = email
        if role is not None:
            fields["role"] = UserRole(role).value
        if password is not None:
            _check_password(password)
            fields["password"] = hash_password(password, self.bcrypt_rounds)

        with self.store.transaction() as tx:
            user = tx.get(User, user_id)
            if user is None:
                return None
            if fields:
                user = tx.update(User, user_id, **fields)

        if fields:
            logger.info("User %s updated (%s)", user_id, ", ".join(sorted(fields)))
        return user

    def delete(self, user_id: int) -> bool:
        """Delete a user that nothing references.

        Returns:
            True if deleted, False if the user doesn't exist.

        Raises:
            UserInUseError: User is a seminar speaker or holds registrations.
        """
        with self.store.transaction() as tx:
            user = tx.get(User, user_id, for_update=True)
            if user is None:
                return False

            seminars = tx.count(Seminar, Seminar.speaker_id == user_id)
            registrations = tx.count(Registration, Registration.participant_id == user_id)
            if seminars or registrations:
                raise UserInUseError(
                    f"User {user_id} is referenced by {seminars} seminar(s) "
                    f"and {registrations} registration(s)"
                )

            tx.delete(User, user_id)

        logger.info("User %s deleted", user_id)
        return True


def _to_cost(cost: Decimal | int | float | str | None) -> Decimal | None:
    if cost is None:
        return None
    try:
        value = cost if isinstance(cost, Decimal) else Decimal(str(cost))
    except InvalidOperation as e:
        raise ValidationFailure(f"Invalid cost: {cost!r}") from e
    if not value.is_finite():
        raise ValidationFailure(f"Invalid cost: {cost!r}")
    if value < 0:
        raise ValidationFailure("Cost must be non-negative")
    if value.as_tuple().exponent < -COST_PLACES:
        raise ValidationFailure(f"Cost must have at most {COST_PLACES} decimal places")
    return value


def _check_capacity(capacity: int) -> None:
    if capacity <= 0:
        raise ValidationFailure("Capacity must be a positive integer")


def _ensure_speaker(tx: StoreTransaction, speaker_id: int) -> None:
    speaker = tx.get(User, speaker_id)
    if speaker is None:
        raise SpeakerNotFoundError(f"Speaker with ID {speaker_id} not found")
    if speaker.role != UserRole.SPEAKER:
        raise InvalidRoleError(
            f"User with ID {speaker_id} is not a speaker (role: {speaker.role})"
        )


class SeminarCatalog:
    """Creates, updates and deletes seminars.

    The speaker must be a user with the speaker role, checked on create and
    whenever the speaker is reassigned. Deletion cascades through CascadeDeleter.
    """

    def __init__(self, store: EntityStore, deleter: CascadeDeleter | None = None) -> None:
        self.store = store
        self.deleter = deleter if deleter is not None else CascadeDeleter(store)

    def create(
        self,
        title: str,
        date: datetime,
        time: str,
        location: str,
        speaker_id: int,
        capacity: int,
        description: str = "",
        cost: Decimal | int | float | str | None = Decimal("0"),
        registration_type: RegistrationType | str = RegistrationType.FREE,
    ) -> Seminar:
        """Create a seminar.

        Raises:
            SpeakerNotFoundError: Speaker doesn't exist.
            InvalidRoleError: User is not a speaker.
            ValidationFailure: Capacity is not positive or cost is negative.
        """
        _check_capacity(capacity)
        seminar_cost = _to_cost(cost)

        with self.store.transaction() as tx:
            _ensure_speaker(tx, speaker_id)
            seminar = tx.insert(
                Seminar,
                title=title,
                description=description,
                date=date,
                time=time,
                location=location,
                speaker_id=speaker_id,
                capacity=capacity,
                cost=seminar_cost,
                registration_type=RegistrationType(registration_type).value,
            )

        logger.info(
            "Seminar %s created (capacity=%s, type=%s)",
            seminar.id,
            seminar.capacity,
            seminar.registration_type,
        )
        return seminar

    def get(self, seminar_id: int) -> Seminar | None:
        """Get a seminar by ID, or None if it doesn't exist."""
        return self.store.get(Seminar, seminar_id)

    def list_all(self) -> list[Seminar]:
        """List all seminars, ordered by date then ID."""
        return self.store.find(Seminar, order_by=(Seminar.date, Seminar.id))

    def list_by_speaker(self, speaker_id: int) -> list[Seminar]:
        """List seminars given by one speaker."""
        return self.store.find(Seminar, Seminar.speaker_id == speaker_id)

    def update(self, seminar_id: int, **changes: Any) -> Seminar | None:
        """Update seminar fields. Only provided (non-None) fields are updated.

        ``cost`` is the exception: pass ``cost=None`` explicitly to make a
        seminar free of charge.

        Returns:
            The updated Seminar, or None if it doesn't exist.

        Raises:
            SpeakerNotFoundError: New speaker doesn't exist.
            InvalidRoleError: New speaker is not a speaker.
            ValidationFailure: Capacity is not positive or cost is negative.
        """
        allowed = {
            "title",
            "description",
            "date",
            "time",
            "location",
            "speaker_id",
            "capacity",
            "cost",
            "registration_type",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationFailure(f"Unknown seminar fields: {', '.join(sorted(unknown))}")

        fields = {k: v for k, v in changes.items() if v is not None or k == "cost"}
        if "capacity" in fields:
            _check_capacity(fields["capacity"])
        if "cost" in fields:
            fields["cost"] = _to_cost(fields["cost"])
        if "registration_type" in fields:
            fields["registration_type"] = RegistrationType(fields["registration_type"]).value

        with self.store.transaction() as tx:
            seminar = tx.get(Seminar, seminar_id, for_update=True)
            if seminar is None:
                return None
            if "speaker_id" in fields:
                _ensure_speaker(tx, fields["speaker_id"])
            if fields:
                seminar = tx.update(Seminar, seminar_id, **fields)

        if fields:
            logger.info("Seminar %s updated (%s)", seminar_id, ", ".join(sorted(fields)))
        return seminar

    def delete(self, seminar_id: int) -> bool:
        """Delete a seminar and its dependents. False if it doesn't exist."""
        return self.deleter.delete_seminar(seminar_id)
