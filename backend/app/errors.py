# app/errors.py
"""
Error kinds raised by the repositories.

Routers translate these into HTTP responses (see app.main); repositories never
raise HTTPException themselves.
"""
from __future__ import annotations


class DataError(Exception):
    """Base for every error the data layer reports on purpose."""


class NotFoundOrUnauthorized(DataError):
    """
    Nothing matched (resource id, user id).

    A row owned by someone else and a row that does not exist look the same,
    so ids cannot be probed across users.
    """

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class ValidationFailure(DataError):
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class UniquenessViolation(ValidationFailure):
    pass


class RestrictViolation(DataError):
    """A delete was refused because other rows still reference the target."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class StorageFailure(DataError):
    """Unexpected database failure. Details are logged, never returned."""

    def __init__(self, message: str = "storage error"):
        super().__init__(message)
