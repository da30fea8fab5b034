"""Exceptions for the registration workflow."""


class RegistryError(Exception):
    """Base exception for workflow errors."""

    pass


class NotFoundError(RegistryError):
    """A referenced entity id did not resolve."""

    pass


class ParticipantNotFoundError(NotFoundError):
    """Participant with given ID does not exist."""


class SeminarNotFoundError(NotFoundError):
    """Seminar with given ID does not exist."""


class RegistrationNotFoundError(NotFoundError):
    """Registration with given ID does not exist."""


class SpeakerNotFoundError(NotFoundError):
    """Speaker with given ID does not exist."""


class UserNotFoundError(NotFoundError):
    """User with given ID does not exist."""


class ValidationFailure(RegistryError):
    """A business rule rejected the operation.

    The message is the human-readable reason and is passed through to callers.
    """

    pass


class InvalidRoleError(ValidationFailure):
    """User does not have the role this operation requires."""


class InvalidRegistrationStateError(ValidationFailure):
    """Registration status does not allow this operation."""


class DidNotAttendError(ValidationFailure):
    """No attendance is recorded for the registration, or it is marked absent."""


class ConflictError(ValidationFailure):
    """The operation conflicts with existing state."""

    pass


class DuplicateRegistrationError(ConflictError):
    """Participant already holds an active registration for this seminar."""


class CapacityExceededError(ConflictError):
    """Seminar has no confirmed seats left."""


class UserInUseError(ConflictError):
    """User is still referenced as a speaker or participant."""
