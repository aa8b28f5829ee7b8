"""Record store protocol. Application layer depends on this; infrastructure implements it."""

from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Optional, Protocol

from sar_api.domain.models.sar import SarStatus, SuspiciousActivityReport


@dataclass(frozen=True)
class ScanPredicates:
    """
    Coarse filters a store evaluates during scan: status equality and an inclusive created_at range.
    Stores that cannot index these still apply them before yielding a batch.
    """

    status: Optional[SarStatus] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None

    def matches(self, sar: SuspiciousActivityReport) -> bool:
        if self.status is not None and sar.status != self.status:
            return False
        if self.created_after is not None and sar.created_at < self.created_after:
            return False
        if self.created_before is not None and sar.created_at > self.created_before:
            return False
        return True


class RecordStore(Protocol):
    """Keyed durable storage for SARs. Key is sar.id; last write wins."""

    async def save(self, sar: SuspiciousActivityReport) -> None:
        """Insert or replace the record. Raises StoreUnavailableError on backend failure."""
        ...

    async def load(self, sar_id: str) -> Optional[SuspiciousActivityReport]:
        """Return the record, or None if the id is unknown."""
        ...

    async def delete(self, sar_id: str) -> bool:
        """Remove the record. Returns False if it did not exist."""
        ...

    def scan(self, predicates: ScanPredicates) -> AsyncIterator[list[SuspiciousActivityReport]]:
        """
        Lazily yield batches of records matching predicates. Each call starts a fresh scan.
        Callers close the iterator (aclose) when stopping early.
        """
        ...
