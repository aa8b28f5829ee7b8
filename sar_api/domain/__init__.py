"""Domain layer: models, lifecycle, normalizer, schemas, validators, exceptions. Pure business logic only."""

from sar_api.domain.exceptions import (
    DomainError,
    DomainValidationError,
    FieldError,
    ImmutableRecordError,
    InvalidArgumentError,
    InvalidTransitionError,
)
from sar_api.domain.models import SarStatus, SuspicionReason, SuspiciousActivityReport

__all__ = [
    "DomainError",
    "DomainValidationError",
    "FieldError",
    "ImmutableRecordError",
    "InvalidArgumentError",
    "InvalidTransitionError",
    "SarStatus",
    "SuspicionReason",
    "SuspiciousActivityReport",
]
