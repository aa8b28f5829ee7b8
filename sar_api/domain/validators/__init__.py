"""Domain validators. Pure validation functions."""

from sar_api.domain.validators.sar_validator import (
    raise_for_errors,
    validate_address,
    validate_create_sar,
    validate_customer,
    validate_sar_changes,
    validate_suspicion,
    validate_transaction,
    validate_transactions,
)

__all__ = [
    "raise_for_errors",
    "validate_address",
    "validate_create_sar",
    "validate_customer",
    "validate_sar_changes",
    "validate_suspicion",
    "validate_transaction",
    "validate_transactions",
]
