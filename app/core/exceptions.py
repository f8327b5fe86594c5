"""
Domain exceptions.

Services raise these typed errors; the API layer maps them to HTTP
responses in a single exception handler (see ``app.main``).  Nothing
below ``app.api`` raises ``HTTPException``.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError


@dataclass(frozen=True)
class FieldError:
    """A single validation failure bound to an input field."""

    field: str
    message: str


class DomainError(Exception):
    """Base class for every error the engine reports to its callers."""

    status_code: int = 500
    code: str = "internal"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def errors(self) -> list[FieldError]:
        if self.field is None:
            return []
        return [FieldError(self.field, self.message)]


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, identifier: object = None, message: Optional[str] = None):
        self.entity = entity
        self.identifier = identifier
        if message is None:
            message = f"{entity} not found" if identifier is None else f"{entity} {identifier} not found"
        super().__init__(message)


class ValidationFailedError(DomainError):
    """One or more inputs are invalid.

    Accumulates several :class:`FieldError` entries so a caller sees
    every problem with a request in one response.
    """

    status_code = 400
    code = "validation"

    def __init__(self, message: str = "Validation failed", field: Optional[str] = None,
                 errors: Optional[list[FieldError]] = None, ):
        super().__init__(message, field)
        self._errors = list(errors or [])
        if field is not None:
            self._errors.insert(0, FieldError(field, message))

    def errors(self) -> list[FieldError]:
        return list(self._errors)


class ConflictError(DomainError):
    """The request collides with existing state (duplicate, already running)."""

    status_code = 409
    code = "conflict"


class InvalidStateError(ConflictError):
    """An action is not allowed from the current state-machine state."""

    code = "invalid_state"

    def __init__(self, action: str, current_state: str):
        self.action = action
        self.current_state = current_state
        super().__init__(f"cannot {action} from state {current_state}")


class UnprocessableError(DomainError):
    """The request is well formed but cannot be satisfied for this user."""

    status_code = 422
    code = "unprocessable"


class MaxNotFoundError(UnprocessableError):
    """The user has no current max for a lift.

    The prescription is valid; the user simply lacks training history.
    """

    code = "max_not_found"

    def __init__(self, lift_id: int, max_type: str):
        self.lift_id = lift_id
        self.max_type = max_type
        super().__init__(f"no current {max_type} max for lift {lift_id}")


class InternalError(DomainError):
    """Unexpected failure; the cause is logged, never rendered."""

    status_code = 500
    code = "internal"

    def __init__(self, message: str = "Internal error", cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


def field_errors(prefix: str, exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ``ValidationError`` into field errors under ``prefix``."""
    return [FieldError(".".join([prefix, *(str(p) for p in err["loc"])]), err["msg"]) for err in exc.errors()]
