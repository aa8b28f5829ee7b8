"""SAR lifecycle rules: legal status transitions and mutability. Pure functions over immutable records."""

from dataclasses import replace
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from sar_api.domain.exceptions import (
    ImmutableRecordError,
    InvalidArgumentError,
    InvalidTransitionError,
)
from sar_api.domain.models.sar import SarChanges, SarStatus, SuspiciousActivityReport

# Allowed status transitions: from_status -> set of valid next statuses
_STATUS_TRANSITIONS: Dict[SarStatus, FrozenSet[SarStatus]] = {
    SarStatus.DRAFT: frozenset({SarStatus.SUBMITTED}),
    SarStatus.SUBMITTED: frozenset({SarStatus.FILED}),
    SarStatus.FILED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[SarStatus] = frozenset(
    status for status, targets in _STATUS_TRANSITIONS.items() if not targets
)


def can_transition(current: SarStatus, new: SarStatus) -> bool:
    return new in _STATUS_TRANSITIONS.get(current, frozenset())


def ensure_mutable(sar: SuspiciousActivityReport, action: str = "modify") -> None:
    """Raise ImmutableRecordError if the SAR is in a terminal (filed) status."""
    if sar.status in TERMINAL_STATUSES:
        raise ImmutableRecordError(f"Cannot {action} a filed SAR")


def _validate_transition(sar: SuspiciousActivityReport, new: SarStatus, action: str, message: str) -> None:
    ensure_mutable(sar, action=action)
    if not can_transition(sar.status, new):
        raise InvalidTransitionError(
            f"{message} (current status: {sar.status.value})"
        )


def submit(sar: SuspiciousActivityReport, now: datetime) -> SuspiciousActivityReport:
    """Draft -> Submitted."""
    _validate_transition(sar, SarStatus.SUBMITTED, "submit", "Only draft SARs can be submitted")
    return replace(sar, status=SarStatus.SUBMITTED, updated_at=now)


def normalize_filing_reference(reference: Optional[str]) -> str:
    """Return the stripped reference or raise InvalidArgumentError when it is blank."""
    if reference is None or not reference.strip():
        raise InvalidArgumentError("Filing reference is required")
    return reference.strip()


def file_report(sar: SuspiciousActivityReport, reference: str, now: datetime) -> SuspiciousActivityReport:
    """Submitted -> Filed. Stamps filing_reference and filed_at together."""
    reference = normalize_filing_reference(reference)
    _validate_transition(sar, SarStatus.FILED, "file", "Only submitted SARs can be filed")
    return replace(
        sar,
        status=SarStatus.FILED,
        filing_reference=reference,
        filed_at=now,
        updated_at=now,
    )


def apply_changes(
    sar: SuspiciousActivityReport,
    changes: SarChanges,
    now: datetime,
) -> SuspiciousActivityReport:
    """
    Partial update. Omitted parts keep their stored value; the status is never touched here.
    Callers are expected to have normalized the supplied parts already.
    """
    ensure_mutable(sar, action="update")
    if changes.transactions is not None and not changes.transactions:
        raise InvalidArgumentError("At least one transaction is required")
    return replace(
        sar,
        customer=changes.customer if changes.customer is not None else sar.customer,
        transactions=changes.transactions if changes.transactions is not None else sar.transactions,
        suspicion=changes.suspicion if changes.suspicion is not None else sar.suspicion,
        updated_at=now,
    )
