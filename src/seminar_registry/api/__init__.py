"""REST API for Seminar Registry."""

from seminar_registry.api.app import create_app
from seminar_registry.api.models import (
    APIResponse,
    RegistrationCreate,
    RegistrationResponse,
    SeminarCreate,
    SeminarResponse,
    UserCreate,
    UserResponse,
)

__all__ = [
    "APIResponse",
    "RegistrationCreate",
    "RegistrationResponse",
    "SeminarCreate",
    "SeminarResponse",
    "UserCreate",
    "UserResponse",
    "create_app",
]
