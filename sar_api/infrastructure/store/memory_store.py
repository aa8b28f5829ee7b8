"""In-process record store. Default backend for local runs and tests."""

from typing import AsyncIterator, Dict, Optional

from sar_api.application.record_store import ScanPredicates
from sar_api.domain.models.sar import SuspiciousActivityReport

DEFAULT_BATCH_SIZE = 100


class InMemoryRecordStore:
    """
    Dict-backed RecordStore. Records are frozen dataclasses, so storing the instance is safe.
    scan() snapshots the keys at start and yields predicate-filtered batches of batch_size
    scanned records, like a paged table scan.
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self._records: Dict[str, SuspiciousActivityReport] = {}
        self._batch_size = batch_size

    async def save(self, sar: SuspiciousActivityReport) -> None:
        self._records[sar.id] = sar

    async def load(self, sar_id: str) -> Optional[SuspiciousActivityReport]:
        return self._records.get(sar_id)

    async def delete(self, sar_id: str) -> bool:
        return self._records.pop(sar_id, None) is not None

    async def scan(self, predicates: ScanPredicates) -> AsyncIterator[list[SuspiciousActivityReport]]:
        ids = list(self._records)
        for start in range(0, len(ids), self._batch_size):
            page = (self._records.get(sar_id) for sar_id in ids[start:start + self._batch_size])
            yield [sar for sar in page if sar is not None and predicates.matches(sar)]

    def __len__(self) -> int:
        return len(self._records)
