"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single validation failure: dotted field path and human-readable message."""

    field: str
    message: str


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated. Carries every field error found."""

    def __init__(self, errors: list[FieldError], message: str = "Validation failed") -> None:
        self.errors = list(errors)
        super().__init__(message)


class InvalidTransitionError(DomainError):
    """Raised when submit/file is attempted from a status that does not permit it."""


class ImmutableRecordError(DomainError):
    """Raised when any mutation is attempted on a filed SAR."""


class InvalidArgumentError(DomainError):
    """Raised when structurally invalid input reaches the core (e.g. empty filing reference)."""
