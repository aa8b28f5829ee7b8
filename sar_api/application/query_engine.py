"""List-query resolution: store pushdown, residual filtering, bounded accumulation, summary projection."""

from contextlib import aclosing
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sar_api.application.record_store import RecordStore, ScanPredicates
from sar_api.core.clock import as_utc
from sar_api.domain.models.sar import SarStatus, SarSummary, SuspiciousActivityReport, summarize

DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 100
CONTINUATION_MARKER = "hasMore"


@dataclass(frozen=True)
class ListQuery:
    status: Optional[SarStatus] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    customer_name: Optional[str] = None
    account_number: Optional[str] = None
    limit: int = DEFAULT_LIMIT
    # Presence-only; the engine never resumes from it.
    continuation: Optional[str] = None


@dataclass(frozen=True)
class SarListPage:
    sars: list[SarSummary] = field(default_factory=list)
    total_count: int = 0
    next_token: Optional[str] = None


def clamp_limit(limit: Optional[int], max_limit: int = MAX_LIMIT) -> int:
    max_limit = min(max_limit, MAX_LIMIT)
    if limit is None:
        return min(DEFAULT_LIMIT, max_limit)
    return max(MIN_LIMIT, min(limit, max_limit))


def pushdown_predicates(query: ListQuery) -> ScanPredicates:
    """Filters the store can evaluate while scanning."""
    return ScanPredicates(
        status=query.status,
        created_after=as_utc(query.created_after) if query.created_after else None,
        created_before=as_utc(query.created_before) if query.created_before else None,
    )


def matches_residual(sar: SuspiciousActivityReport, query: ListQuery) -> bool:
    """Filters evaluated in memory: customer name substring and account number, both case-insensitive."""
    if query.customer_name:
        if query.customer_name.casefold() not in sar.customer.full_name.casefold():
            return False
    if query.account_number:
        if sar.customer.account_number.casefold() != query.account_number.casefold():
            return False
    return True


class QueryEngine:
    """Resolves a ListQuery against a RecordStore into a single bounded page."""

    def __init__(self, store: RecordStore, max_limit: int = MAX_LIMIT) -> None:
        self._store = store
        self._max_limit = max_limit

    async def run(self, query: ListQuery) -> SarListPage:
        """
        Accumulates residual-filtered batches until the limit is reached or the store is
        exhausted. total_count is what was accumulated, which may exceed the page size
        because whole batches are counted.
        """
        limit = clamp_limit(query.limit, self._max_limit)
        matched: list[SuspiciousActivityReport] = []

        async with aclosing(self._store.scan(pushdown_predicates(query))) as batches:
            async for batch in batches:
                matched.extend(sar for sar in batch if matches_residual(sar, query))
                if len(matched) >= limit:
                    break

        return SarListPage(
            sars=[summarize(sar) for sar in matched[:limit]],
            total_count=len(matched),
            next_token=CONTINUATION_MARKER if len(matched) >= limit else None,
        )
