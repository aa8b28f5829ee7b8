"""Domain model for suspicious activity reports. Pure business semantics. No ORM or infrastructure."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class SarStatus(str, Enum):
    """Lifecycle status of a SAR. Only moves forward: Draft -> Submitted -> Filed."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    FILED = "Filed"


class SuspicionReason(str, Enum):
    UNUSUAL_TRANSACTION_PATTERN = "UnusualTransactionPattern"
    HIGH_VALUE_TRANSACTION = "HighValueTransaction"
    STRUCTURED_TRANSACTION = "StructuredTransaction"
    SUSPICIOUS_CUSTOMER_BEHAVIOR = "SuspiciousCustomerBehavior"
    KNOWN_SUSPICIOUS_ENTITY = "KnownSuspiciousEntity"
    GEOGRAPHIC_RISK = "GeographicRisk"
    OTHER = "Other"


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    zip_code: str
    country: Optional[str] = None


@dataclass(frozen=True)
class CustomerInformation:
    """Subject of the report. customer_type and address.country are defaulted by the normalizer."""

    first_name: str
    last_name: str
    date_of_birth: date
    social_security_number: str
    address: Address
    account_number: str
    middle_name: Optional[str] = None
    phone_number: Optional[str] = None
    email_address: Optional[str] = None
    customer_type: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class TransactionDetail:
    transaction_id: str
    transaction_date: datetime
    amount: Decimal
    transaction_type: str
    description: Optional[str] = None
    counterparty_name: Optional[str] = None
    counterparty_account: Optional[str] = None
    counterparty_bank: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class SuspicionDetails:
    primary_reason: SuspicionReason
    description: str
    additional_reasons: tuple[SuspicionReason, ...] = ()
    suspicion_identified_date: Optional[datetime] = None
    investigation_notes: Optional[str] = None
    prior_sars_on_customer: bool = False
    regulatory_guidance_reference: Optional[str] = None


@dataclass(frozen=True)
class SuspiciousActivityReport:
    """Aggregate root. Frozen; lifecycle operations return a new instance via dataclasses.replace."""

    id: str
    created_at: datetime
    updated_at: datetime
    status: SarStatus
    customer: CustomerInformation
    transactions: tuple[TransactionDetail, ...]
    suspicion: SuspicionDetails
    filing_reference: Optional[str] = None
    filed_at: Optional[datetime] = None


@dataclass(frozen=True)
class SarSummary:
    """List projection of a SAR. Never carries the full record."""

    id: str
    created_at: datetime
    updated_at: datetime
    status: SarStatus
    customer_name: str
    account_number: str
    primary_reason: SuspicionReason
    transaction_count: int
    total_amount: Decimal


@dataclass(frozen=True)
class SarChanges:
    """Partial update: None means 'keep the stored value'."""

    customer: Optional[CustomerInformation] = None
    transactions: Optional[tuple[TransactionDetail, ...]] = None
    suspicion: Optional[SuspicionDetails] = None

    def is_empty(self) -> bool:
        return self.customer is None and self.transactions is None and self.suspicion is None


def summarize(sar: SuspiciousActivityReport) -> SarSummary:
    """Project a full record to its list summary."""
    return SarSummary(
        id=sar.id,
        created_at=sar.created_at,
        updated_at=sar.updated_at,
        status=sar.status,
        customer_name=sar.customer.full_name,
        account_number=sar.customer.account_number,
        primary_reason=sar.suspicion.primary_reason,
        transaction_count=len(sar.transactions),
        total_amount=sum((t.amount for t in sar.transactions), Decimal("0")),
    )

