"""Domain models. Pure business entities."""

from sar_api.domain.models.sar import (
    Address,
    CustomerInformation,
    SarChanges,
    SarStatus,
    SarSummary,
    SuspicionDetails,
    SuspicionReason,
    SuspiciousActivityReport,
    TransactionDetail,
    summarize,
)

__all__ = [
    "Address",
    "CustomerInformation",
    "SarChanges",
    "SarStatus",
    "SarSummary",
    "SuspicionDetails",
    "SuspicionReason",
    "SuspiciousActivityReport",
    "TransactionDetail",
    "summarize",
]
