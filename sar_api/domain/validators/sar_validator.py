"""Validators for SAR domain rules. Pure functions returning error lists, no infrastructure or DB access."""

import re
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from sar_api.domain.exceptions import DomainValidationError, FieldError
from sar_api.domain.models.sar import (
    Address,
    CustomerInformation,
    SarChanges,
    SuspicionDetails,
    TransactionDetail,
)

# Field limits (domain constants; avoid magic numbers)
NAME_MAX_LENGTH = 50
ACCOUNT_NUMBER_MAX_LENGTH = 20
STREET_MAX_LENGTH = 100
CITY_MAX_LENGTH = 50
TRANSACTION_ID_MAX_LENGTH = 50
TRANSACTION_TYPE_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 2000

SSN_PATTERN = re.compile(r"^\d{3}-?\d{2}-?\d{4}$")
ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
PHONE_PATTERN = re.compile(r"^\+?1?-?\(?[0-9]{3}\)?-?[0-9]{3}-?[0-9]{4}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _required_text(value: Optional[str], field: str, max_length: int, label: str) -> list[FieldError]:
    if _blank(value) or len(value) > max_length:
        return [FieldError(field, f"{label} is required and must be {max_length} characters or less")]
    return []


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _not_in_future(value: Optional[date | datetime], today: date) -> bool:
    # Up to and including tomorrow.
    return value is None or _as_date(value) <= today + timedelta(days=1)


def validate_address(address: Optional[Address], prefix: str = "address") -> list[FieldError]:
    if address is None:
        return [FieldError(prefix, "Address is required")]
    errors = _required_text(address.street, f"{prefix}.street", STREET_MAX_LENGTH, "Street address")
    errors += _required_text(address.city, f"{prefix}.city", CITY_MAX_LENGTH, "City")
    if _blank(address.state) or len(address.state) != 2:
        errors.append(FieldError(f"{prefix}.state", "State must be a 2-character state code"))
    if _blank(address.zip_code) or not ZIP_PATTERN.match(address.zip_code):
        errors.append(FieldError(f"{prefix}.zip_code", "ZIP code must be in format XXXXX or XXXXX-XXXX"))
    country = (address.country or "").strip()
    if country and len(country) != 2:
        errors.append(FieldError(f"{prefix}.country", "Country must be a 2-character country code"))
    return errors


def validate_customer(
    customer: Optional[CustomerInformation],
    today: date,
    prefix: str = "customer",
) -> list[FieldError]:
    """Customer identity, contact and account rules."""
    if customer is None:
        return [FieldError(prefix, "Customer information is required")]
    errors = _required_text(customer.first_name, f"{prefix}.first_name", NAME_MAX_LENGTH, "First name")
    errors += _required_text(customer.last_name, f"{prefix}.last_name", NAME_MAX_LENGTH, "Last name")
    if customer.date_of_birth is None or _as_date(customer.date_of_birth) >= today:
        errors.append(FieldError(f"{prefix}.date_of_birth", "Date of birth must be in the past"))
    if _blank(customer.social_security_number) or not SSN_PATTERN.match(customer.social_security_number):
        errors.append(
            FieldError(
                f"{prefix}.social_security_number",
                "Social Security Number must be in format XXX-XX-XXXX or XXXXXXXXX",
            )
        )
    errors += _required_text(
        customer.account_number, f"{prefix}.account_number", ACCOUNT_NUMBER_MAX_LENGTH, "Account number"
    )
    errors += validate_address(customer.address, prefix=f"{prefix}.address")
    if customer.phone_number and not PHONE_PATTERN.match(customer.phone_number):
        errors.append(FieldError(f"{prefix}.phone_number", "Phone number must be a valid US phone number"))
    if customer.email_address and not EMAIL_PATTERN.match(customer.email_address):
        errors.append(FieldError(f"{prefix}.email_address", "Email address must be valid"))
    return errors


def validate_transaction(transaction: TransactionDetail, today: date, prefix: str = "transaction") -> list[FieldError]:
    errors = _required_text(
        transaction.transaction_id, f"{prefix}.transaction_id", TRANSACTION_ID_MAX_LENGTH, "Transaction ID"
    )
    if transaction.transaction_date is None or not _not_in_future(transaction.transaction_date, today):
        errors.append(FieldError(f"{prefix}.transaction_date", "Transaction date cannot be in the future"))
    if transaction.amount is None or transaction.amount <= 0:
        errors.append(FieldError(f"{prefix}.amount", "Transaction amount must be greater than zero"))
    errors += _required_text(
        transaction.transaction_type, f"{prefix}.transaction_type", TRANSACTION_TYPE_MAX_LENGTH, "Transaction type"
    )
    return errors


def validate_transactions(
    transactions: Optional[Sequence[TransactionDetail]],
    today: date,
    prefix: str = "transactions",
) -> list[FieldError]:
    """A non-empty list of individually valid transactions."""
    if not transactions:
        return [FieldError(prefix, "At least one transaction is required")]
    errors: list[FieldError] = []
    for index, transaction in enumerate(transactions):
        errors += validate_transaction(transaction, today, prefix=f"{prefix}[{index}]")
    return errors


def validate_suspicion(
    suspicion: Optional[SuspicionDetails],
    today: date,
    prefix: str = "suspicion",
) -> list[FieldError]:
    if suspicion is None:
        return [FieldError(prefix, "Suspicion details are required")]
    errors: list[FieldError] = []
    if suspicion.primary_reason is None:
        errors.append(FieldError(f"{prefix}.primary_reason", "Primary reason must be a valid suspicion reason"))
    description = suspicion.description or ""
    if _blank(description) or not (DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH):
        errors.append(
            FieldError(
                f"{prefix}.description",
                f"Description is required and must be between {DESCRIPTION_MIN_LENGTH} "
                f"and {DESCRIPTION_MAX_LENGTH} characters",
            )
        )
    if not _not_in_future(suspicion.suspicion_identified_date, today):
        errors.append(
            FieldError(f"{prefix}.suspicion_identified_date", "Suspicion identified date cannot be in the future")
        )
    return errors


def validate_create_sar(
    customer: Optional[CustomerInformation],
    transactions: Optional[Sequence[TransactionDetail]],
    suspicion: Optional[SuspicionDetails],
    today: date,
) -> list[FieldError]:
    """Compose every structure check for a new SAR."""
    return (
        validate_customer(customer, today)
        + validate_transactions(transactions, today)
        + validate_suspicion(suspicion, today)
    )


def validate_sar_changes(changes: SarChanges, today: date) -> list[FieldError]:
    """Only the supplied parts of a partial update are checked."""
    errors: list[FieldError] = []
    if changes.customer is not None:
        errors += validate_customer(changes.customer, today)
    if changes.transactions is not None:
        errors += validate_transactions(changes.transactions, today)
    if changes.suspicion is not None:
        errors += validate_suspicion(changes.suspicion, today)
    return errors


def raise_for_errors(errors: Iterable[FieldError]) -> None:
    """Raise DomainValidationError carrying all errors, if any."""
    errors = list(errors)
    if errors:
        raise DomainValidationError(errors)
