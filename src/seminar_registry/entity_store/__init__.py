"""Entity Store - Persistent storage for users, seminars and their registrations."""

from seminar_registry.entity_store.exceptions import (
    EmailExistsError,
    EntityStoreError,
)
from seminar_registry.entity_store.models import (
    Attendance,
    Certificate,
    Registration,
    RegistrationStatus,
    RegistrationType,
    Seminar,
    User,
    UserRole,
    utcnow,
)
from seminar_registry.entity_store.store import EntityStore, StoreTransaction

__all__ = [
    "Attendance",
    "Certificate",
    "EmailExistsError",
    "EntityStore",
    "EntityStoreError",
    "Registration",
    "RegistrationStatus",
    "RegistrationType",
    "Seminar",
    "StoreTransaction",
    "User",
    "UserRole",
    "utcnow",
]
