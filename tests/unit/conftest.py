"""Shared fixtures: fixed clock, in-memory store, SAR building blocks, SarService."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from sar_api.application.sar_service import SarService
from sar_api.domain.models.sar import (
    Address,
    CustomerInformation,
    SuspicionDetails,
    SuspicionReason,
    TransactionDetail,
)
from sar_api.infrastructure.store.memory_store import InMemoryRecordStore

NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


class FixedClock:
    """Clock pinned to one instant; advance() moves it forward."""

    def __init__(self, instant: datetime = NOW) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, **delta) -> datetime:
        self.instant = self.instant + timedelta(**delta)
        return self.instant


def _customer(
    first_name: str = "Jane",
    last_name: str = "Doe",
    account_number: str = "ACC-1",
    country: str | None = None,
    customer_type: str | None = None,
) -> CustomerInformation:
    return CustomerInformation(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date(1985, 6, 1),
        social_security_number="123-45-6789",
        address=Address(
            street="1 Main St",
            city="Springfield",
            state="IL",
            zip_code="62701",
            country=country,
        ),
        account_number=account_number,
        customer_type=customer_type,
    )


def _transaction(
    transaction_id: str = "TX-1",
    amount: str = "100.00",
    location: str | None = None,
) -> TransactionDetail:
    return TransactionDetail(
        transaction_id=transaction_id,
        transaction_date=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        amount=Decimal(amount),
        transaction_type="Wire",
        location=location,
    )


def _suspicion(identified: datetime | None = None) -> SuspicionDetails:
    return SuspicionDetails(
        primary_reason=SuspicionReason.STRUCTURED_TRANSACTION,
        description="Repeated deposits just under the reporting threshold.",
        suspicion_identified_date=identified,
    )


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    return InMemoryRecordStore(batch_size=2)


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def sar_service(store, clock, logger):
    return SarService(store=store, clock=clock, logger=logger)


@pytest.fixture
def customer():
    return _customer()


@pytest.fixture
def transactions():
    return (_transaction("TX-1", "100.00"), _transaction("TX-2", "250.50"))


@pytest.fixture
def suspicion():
    return _suspicion()


@pytest.fixture
def make_customer():
    return _customer


@pytest.fixture
def make_transaction():
    return _transaction


@pytest.fixture
def make_suspicion():
    return _suspicion
