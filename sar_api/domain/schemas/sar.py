"""Pydantic schemas for the SAR API and serialization. Structural typing only; business rules live in validators."""

from datetime import date, datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sar_api.domain.models.sar import SarStatus, SuspicionReason

T = TypeVar("T")


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; readable straight from domain dataclasses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Shared structures
# ---------------------------------------------------------------------------

class AddressSchema(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: Optional[str] = None


class CustomerInformationSchema(CamelModel):
    first_name: str = ""
    last_name: str = ""
    middle_name: Optional[str] = None
    date_of_birth: date
    social_security_number: str = ""
    address: AddressSchema
    phone_number: Optional[str] = None
    email_address: Optional[str] = None
    account_number: str = ""
    customer_type: Optional[str] = None


class TransactionDetailSchema(CamelModel):
    transaction_id: str = ""
    transaction_date: datetime
    amount: Decimal
    transaction_type: str = ""
    description: Optional[str] = None
    counterparty_name: Optional[str] = None
    counterparty_account: Optional[str] = None
    counterparty_bank: Optional[str] = None
    location: Optional[str] = None


class SuspicionDetailsSchema(CamelModel):
    primary_reason: SuspicionReason
    additional_reasons: List[SuspicionReason] = Field(default_factory=list)
    description: str = ""
    suspicion_identified_date: Optional[datetime] = None
    investigation_notes: Optional[str] = None
    prior_sars_on_customer: bool = False
    regulatory_guidance_reference: Optional[str] = None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CreateSarRequest(CamelModel):
    customer: CustomerInformationSchema
    transactions: List[TransactionDetailSchema] = Field(default_factory=list)
    suspicion: SuspicionDetailsSchema


class UpdateSarRequest(CamelModel):
    """Partial update. Status is not writable here; use submit/file."""

    model_config = ConfigDict(extra="forbid")

    customer: Optional[CustomerInformationSchema] = None
    transactions: Optional[List[TransactionDetailSchema]] = None
    suspicion: Optional[SuspicionDetailsSchema] = None


class FileSarRequest(CamelModel):
    filing_reference: str = ""


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class SarResponse(CamelModel):
    """Full record read."""

    id: str
    created_at: datetime
    updated_at: datetime
    status: SarStatus
    customer: CustomerInformationSchema
    transactions: List[TransactionDetailSchema]
    suspicion: SuspicionDetailsSchema
    filing_reference: Optional[str] = None
    filed_at: Optional[datetime] = None


class SarSummaryResponse(CamelModel):
    id: str
    created_at: datetime
    updated_at: datetime
    status: SarStatus
    customer_name: str
    account_number: str
    primary_reason: SuspicionReason
    transaction_count: int
    total_amount: Decimal


class SarListResponse(CamelModel):
    sars: List[SarSummaryResponse] = Field(default_factory=list)
    total_count: int = 0
    next_token: Optional[str] = None


class FieldErrorResponse(CamelModel):
    field: str
    message: str


class ApiResponse(CamelModel, Generic[T]):
    """Envelope for every SAR endpoint."""

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    errors: List[FieldErrorResponse] = Field(default_factory=list)
