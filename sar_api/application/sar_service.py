"""SAR application service. Orchestrates normalizer, lifecycle rules, query engine and record store."""

import logging
import uuid
from typing import Optional, Sequence

from sar_api.application.exceptions import SarNotFoundError, StoreUnavailableError
from sar_api.application.query_engine import ListQuery, QueryEngine, SarListPage
from sar_api.application.record_store import RecordStore
from sar_api.core.clock import Clock
from sar_api.domain import lifecycle
from sar_api.domain.exceptions import InvalidArgumentError
from sar_api.domain.models.sar import (
    CustomerInformation,
    SarChanges,
    SarStatus,
    SuspicionDetails,
    SuspiciousActivityReport,
    TransactionDetail,
)
from sar_api.domain.normalizer import (
    normalize_customer,
    normalize_suspicion,
    normalize_transactions,
)


class SarService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    Every mutation is load -> check -> build new record -> save; the new record is returned only
    after the store acknowledges the write. Load-check-save is not atomic: last write wins.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Clock,
        logger: logging.Logger,
        query_engine: Optional[QueryEngine] = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._logger = logger
        self._query_engine = query_engine or QueryEngine(store)

    async def create(
        self,
        customer: CustomerInformation,
        transactions: Sequence[TransactionDetail],
        suspicion: SuspicionDetails,
    ) -> SuspiciousActivityReport:
        """Normalize inputs, assign id and timestamps, persist as Draft."""
        now = self._clock.now()
        sar = SuspiciousActivityReport(
            id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            status=SarStatus.DRAFT,
            customer=normalize_customer(customer),
            transactions=normalize_transactions(transactions),
            suspicion=normalize_suspicion(suspicion, self._clock),
        )
        if not sar.transactions:
            raise InvalidArgumentError("At least one transaction is required")

        await self._save(sar, "sar_created")
        return sar

    async def get_by_id(self, sar_id: str) -> Optional[SuspiciousActivityReport]:
        """Return the SAR or None. A miss is not an error."""
        self._logger.info("sar_lookup", extra={"sar_id": sar_id})
        return await self._store.load(sar_id)

    async def list(self, query: ListQuery) -> SarListPage:
        page = await self._query_engine.run(query)
        self._logger.info(
            "sar_listed",
            extra={"total_count": page.total_count, "returned": len(page.sars)},
        )
        return page

    async def update(self, sar_id: str, changes: SarChanges) -> SuspiciousActivityReport:
        """Partial update; replaced sub-structures are re-normalized."""
        existing = await self._load_existing(sar_id)
        lifecycle.ensure_mutable(existing, action="update")
        normalized = SarChanges(
            customer=normalize_customer(changes.customer) if changes.customer is not None else None,
            transactions=(
                normalize_transactions(changes.transactions) if changes.transactions is not None else None
            ),
            suspicion=(
                normalize_suspicion(changes.suspicion, self._clock) if changes.suspicion is not None else None
            ),
        )
        updated = lifecycle.apply_changes(existing, normalized, self._clock.now())
        await self._save(updated, "sar_updated")
        return updated

    async def delete(self, sar_id: str) -> None:
        existing = await self._load_existing(sar_id)
        lifecycle.ensure_mutable(existing, action="delete")
        try:
            deleted = await self._store.delete(sar_id)
        except StoreUnavailableError as e:
            self._log_store_failure("delete", sar_id, e)
            raise
        if not deleted:
            # Removed by a concurrent request between load and delete.
            raise SarNotFoundError(sar_id)
        self._logger.info("sar_deleted", extra={"sar_id": sar_id})

    async def submit(self, sar_id: str) -> SuspiciousActivityReport:
        existing = await self._load_existing(sar_id)
        submitted = lifecycle.submit(existing, self._clock.now())
        await self._save(submitted, "sar_submitted")
        return submitted

    async def file(self, sar_id: str, filing_reference: str) -> SuspiciousActivityReport:
        """Submitted -> Filed. A blank reference is rejected before the store is touched."""
        reference = lifecycle.normalize_filing_reference(filing_reference)
        existing = await self._load_existing(sar_id)
        filed = lifecycle.file_report(existing, reference, self._clock.now())
        await self._save(filed, "sar_filed", filing_reference=reference)
        return filed

    async def _load_existing(self, sar_id: str) -> SuspiciousActivityReport:
        sar = await self._store.load(sar_id)
        if sar is None:
            self._logger.info("sar_not_found", extra={"sar_id": sar_id})
            raise SarNotFoundError(sar_id)
        return sar

    async def _save(self, sar: SuspiciousActivityReport, event: str, **extra) -> None:
        try:
            await self._store.save(sar)
        except StoreUnavailableError as e:
            self._log_store_failure("save", sar.id, e)
            raise
        self._logger.info(
            event,
            extra={"sar_id": sar.id, "status": sar.status.value, **extra},
        )

    def _log_store_failure(self, operation: str, sar_id: str, error: Exception) -> None:
        self._logger.error(
            "sar_store_failed",
            extra={"sar_id": sar_id, "operation": operation, "error": str(error)},
        )
