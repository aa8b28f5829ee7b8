"""SQLAlchemy-backed record store. Pushes status and created_at predicates into SQL."""

import asyncio
from typing import AsyncIterator, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sar_api.application.exceptions import StoreUnavailableError
from sar_api.application.record_store import ScanPredicates
from sar_api.core.clock import as_utc
from sar_api.domain.models.sar import SuspiciousActivityReport
from sar_api.infrastructure.database.models import SarRecord
from sar_api.infrastructure.serialization import sar_from_document, sar_to_document

DEFAULT_BATCH_SIZE = 100
DEFAULT_TIMEOUT_SECONDS = 5.0

_STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class DbRecordStore:
    """
    Implements RecordStore on a relational table. scan() pages through matching rows by
    ascending id (keyset pagination), one query per batch.
    """

    def __init__(
        self,
        session: AsyncSession,
        batch_size: int = DEFAULT_BATCH_SIZE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._session = session
        self._batch_size = batch_size
        self._timeout = timeout_seconds

    async def _run(self, awaitable, operation: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except _STORE_ERRORS as e:
            raise StoreUnavailableError(f"Database {operation} failed: {e}") from e

    async def save(self, sar: SuspiciousActivityReport) -> None:
        row = SarRecord(
            id=sar.id,
            status=sar.status.value,
            created_at=as_utc(sar.created_at),
            updated_at=as_utc(sar.updated_at),
            document=sar_to_document(sar),
        )
        await self._run(self._merge_and_commit(row), "save")

    async def _merge_and_commit(self, row: SarRecord) -> None:
        await self._session.merge(row)
        await self._session.commit()

    async def load(self, sar_id: str) -> Optional[SuspiciousActivityReport]:
        stmt = select(SarRecord.document).where(SarRecord.id == sar_id)
        result = await self._run(self._session.execute(stmt), "load")
        document = result.scalar_one_or_none()
        if document is None:
            return None
        return sar_from_document(document)

    async def delete(self, sar_id: str) -> bool:
        result = await self._run(self._delete_and_commit(sar_id), "delete")
        return result.rowcount > 0

    async def _delete_and_commit(self, sar_id: str):
        result = await self._session.execute(delete(SarRecord).where(SarRecord.id == sar_id))
        await self._session.commit()
        return result

    def _scan_statement(self, predicates: ScanPredicates, after_id: Optional[str]):
        stmt = select(SarRecord.id, SarRecord.document)
        if predicates.status is not None:
            stmt = stmt.where(SarRecord.status == predicates.status.value)
        if predicates.created_after is not None:
            stmt = stmt.where(SarRecord.created_at >= as_utc(predicates.created_after))
        if predicates.created_before is not None:
            stmt = stmt.where(SarRecord.created_at <= as_utc(predicates.created_before))
        if after_id is not None:
            stmt = stmt.where(SarRecord.id > after_id)
        return stmt.order_by(SarRecord.id).limit(self._batch_size)

    async def scan(self, predicates: ScanPredicates) -> AsyncIterator[list[SuspiciousActivityReport]]:
        after_id: Optional[str] = None
        while True:
            result = await self._run(self._session.execute(self._scan_statement(predicates, after_id)), "scan")
            rows = result.all()
            if not rows:
                return
            after_id = rows[-1].id
            yield [sar_from_document(row.document) for row in rows]
            if len(rows) < self._batch_size:
                return
