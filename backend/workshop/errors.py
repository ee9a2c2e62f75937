# Overview: Domain error types shared by services and routes.

"""
Workshop domain errors.

Every failure raised by the rule engine or the services is a WorkshopError.
Routes translate them into JSON responses using ``status_code``; the CLI prints
``str(error)``. None of these are fatal: the operation that raised them has
not written anything.
"""


class WorkshopError(Exception):
    """Base class for business-rule failures."""

    status_code = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error": str(self), "details": self.details}


class ValidationError(WorkshopError):
    """400-level input problem."""


class InvalidAmount(ValidationError):
    """Negative or non-numeric money / quantity input."""


class NotFound(WorkshopError):
    status_code = 404


class Unauthorized(WorkshopError):
    """Actor's role lacks the required capability."""
    status_code = 403


class IllegalTransition(WorkshopError):
    """Job-card status move that is not strictly forward."""
    status_code = 409


class InvalidState(WorkshopError):
    """Operation not allowed in the entity's current status."""
    status_code = 409


class ConflictError(WorkshopError):
    """409-level business rule conflict (e.g., duplicate email)."""
    status_code = 409


class RepositoryError(WorkshopError):
    """Storage contract violation, e.g. mutating an append-only collection."""
    status_code = 500
