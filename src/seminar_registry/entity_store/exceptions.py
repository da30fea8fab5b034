"""Custom exceptions for the Entity Store."""


class EntityStoreError(Exception):
    """Base exception for Entity Store errors."""


class EmailExistsError(EntityStoreError):
    """A user with the given email already exists."""
