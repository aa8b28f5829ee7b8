"""Domain schemas. Request/response and validation."""

from sar_api.domain.schemas.sar import (
    AddressSchema,
    ApiResponse,
    CreateSarRequest,
    CustomerInformationSchema,
    FieldErrorResponse,
    FileSarRequest,
    SarListResponse,
    SarResponse,
    SarSummaryResponse,
    SuspicionDetailsSchema,
    TransactionDetailSchema,
    UpdateSarRequest,
)

__all__ = [
    "AddressSchema",
    "ApiResponse",
    "CreateSarRequest",
    "CustomerInformationSchema",
    "FieldErrorResponse",
    "FileSarRequest",
    "SarListResponse",
    "SarResponse",
    "SarSummaryResponse",
    "SuspicionDetailsSchema",
    "TransactionDetailSchema",
    "UpdateSarRequest",
]
