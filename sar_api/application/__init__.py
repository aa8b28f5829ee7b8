# Application layer: services that orchestrate domain and infrastructure.

from sar_api.application.exceptions import (
    ApplicationError,
    SarNotFoundError,
    StoreUnavailableError,
)
from sar_api.application.query_engine import ListQuery, QueryEngine, SarListPage
from sar_api.application.record_store import RecordStore, ScanPredicates
from sar_api.application.sar_service import SarService

__all__ = [
    "ApplicationError",
    "ListQuery",
    "QueryEngine",
    "RecordStore",
    "SarListPage",
    "SarNotFoundError",
    "SarService",
    "ScanPredicates",
    "StoreUnavailableError",
]
