"""Unit tests for SarService: create/get/list/update/delete/submit/file, failures leave the store untouched."""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from sar_api.application.exceptions import SarNotFoundError, StoreUnavailableError
from sar_api.application.query_engine import CONTINUATION_MARKER, ListQuery
from sar_api.application.sar_service import SarService
from sar_api.domain.exceptions import (
    ImmutableRecordError,
    InvalidArgumentError,
    InvalidTransitionError,
)
from sar_api.domain.models.sar import SarChanges, SarStatus


@pytest.fixture
async def draft(sar_service, customer, transactions, suspicion):
    return await sar_service.create(customer, transactions, suspicion)


@pytest.fixture
async def filed(sar_service, draft):
    await sar_service.submit(draft.id)
    return await sar_service.file(draft.id, "FIL-001")


# ---------- create / get ----------


async def test_create_applies_defaults_and_persists(sar_service, store, clock, draft):
    assert draft.status == SarStatus.DRAFT
    assert draft.created_at == clock.now()
    assert draft.updated_at == clock.now()
    assert draft.customer.customer_type == "Individual"
    assert draft.customer.address.country == "US"
    assert all(t.location == "Unknown" for t in draft.transactions)
    assert draft.suspicion.suspicion_identified_date == clock.now()
    assert draft.filing_reference is None
    assert draft.filed_at is None
    assert await store.load(draft.id) == draft


async def test_create_assigns_unique_ids(sar_service, customer, transactions, suspicion):
    first = await sar_service.create(customer, transactions, suspicion)
    second = await sar_service.create(customer, transactions, suspicion)

    assert first.id != second.id


async def test_create_without_transactions_is_rejected(sar_service, store, customer, suspicion):
    with pytest.raises(InvalidArgumentError):
        await sar_service.create(customer, [], suspicion)
    assert len(store) == 0


async def test_get_by_id_round_trip(sar_service, draft):
    assert await sar_service.get_by_id(draft.id) == draft


async def test_get_by_id_missing_returns_none(sar_service):
    assert await sar_service.get_by_id("missing") is None


# ---------- submit / file ----------


async def test_submit_draft(sar_service, store, clock, draft):
    clock.advance(minutes=5)

    submitted = await sar_service.submit(draft.id)

    assert submitted.status == SarStatus.SUBMITTED
    assert submitted.updated_at == clock.now()
    assert await store.load(draft.id) == submitted


async def test_submit_non_draft_leaves_store_unchanged(sar_service, store, draft):
    submitted = await sar_service.submit(draft.id)

    with pytest.raises(InvalidTransitionError):
        await sar_service.submit(draft.id)
    assert await store.load(draft.id) == submitted


async def test_file_submitted(sar_service, store, clock, draft):
    await sar_service.submit(draft.id)
    clock.advance(hours=1)

    filed = await sar_service.file(draft.id, "FIL-001")

    assert filed.status == SarStatus.FILED
    assert filed.filing_reference == "FIL-001"
    assert filed.filed_at == clock.now()
    assert await store.load(draft.id) == filed


async def test_file_empty_reference_is_invalid_argument(sar_service, store, draft):
    submitted = await sar_service.submit(draft.id)

    with pytest.raises(InvalidArgumentError):
        await sar_service.file(draft.id, "")
    assert await store.load(draft.id) == submitted


async def test_file_draft_is_invalid_transition(sar_service, store, draft):
    with pytest.raises(InvalidTransitionError):
        await sar_service.file(draft.id, "FIL-001")
    assert await store.load(draft.id) == draft


async def test_filed_sar_is_immutable(sar_service, store, filed):
    with pytest.raises(ImmutableRecordError):
        await sar_service.update(filed.id, SarChanges(suspicion=replace(filed.suspicion, description="Changed after filing")))
    with pytest.raises(ImmutableRecordError):
        await sar_service.delete(filed.id)
    with pytest.raises(ImmutableRecordError):
        await sar_service.submit(filed.id)
    with pytest.raises(ImmutableRecordError):
        await sar_service.file(filed.id, "FIL-002")
    assert await store.load(filed.id) == filed


async def test_create_submit_file_then_update_fails(sar_service, customer, transactions, suspicion, make_customer):
    sar = await sar_service.create(customer, transactions, suspicion)
    await sar_service.submit(sar.id)
    await sar_service.file(sar.id, "FIL-001")

    with pytest.raises(ImmutableRecordError):
        await sar_service.update(sar.id, SarChanges(customer=make_customer(first_name="John")))


@pytest.mark.parametrize("operation", ["submit", "delete"])
async def test_missing_id_is_not_found(sar_service, operation):
    with pytest.raises(SarNotFoundError) as exc_info:
        await getattr(sar_service, operation)("missing")
    assert exc_info.value.sar_id == "missing"


async def test_file_missing_id_is_not_found(sar_service):
    with pytest.raises(SarNotFoundError):
        await sar_service.file("missing", "FIL-001")


# ---------- update / delete ----------


async def test_update_partial_renormalizes(sar_service, store, clock, draft, make_customer, make_transaction):
    clock.advance(minutes=1)

    updated = await sar_service.update(
        draft.id,
        SarChanges(
            customer=make_customer(first_name="John", country=""),
            transactions=(make_transaction("TX-9", "10.00"),),
        ),
    )

    assert updated.customer.first_name == "John"
    assert updated.customer.address.country == "US"
    assert [t.transaction_id for t in updated.transactions] == ["TX-9"]
    assert updated.transactions[0].location == "Unknown"
    assert updated.suspicion == draft.suspicion
    assert updated.status == SarStatus.DRAFT
    assert updated.created_at == draft.created_at
    assert updated.updated_at == clock.now()
    assert await store.load(draft.id) == updated


async def test_update_submitted_is_allowed(sar_service, draft, make_customer):
    await sar_service.submit(draft.id)

    updated = await sar_service.update(draft.id, SarChanges(customer=make_customer(last_name="Smith")))

    assert updated.status == SarStatus.SUBMITTED
    assert updated.customer.last_name == "Smith"


async def test_update_missing_is_not_found(sar_service, make_customer):
    with pytest.raises(SarNotFoundError):
        await sar_service.update("missing", SarChanges(customer=make_customer()))


async def test_update_with_empty_transactions_is_rejected(sar_service, store, draft):
    with pytest.raises(InvalidArgumentError):
        await sar_service.update(draft.id, SarChanges(transactions=()))
    assert await store.load(draft.id) == draft


async def test_delete_draft(sar_service, store, draft):
    await sar_service.delete(draft.id)

    assert await store.load(draft.id) is None


# ---------- list ----------


async def test_list_summarizes_transactions(sar_service, draft):
    page = await sar_service.list(ListQuery())

    assert page.total_count == 1
    summary = page.sars[0]
    assert summary.id == draft.id
    assert summary.transaction_count == 2
    assert summary.total_amount == Decimal("350.50")
    assert page.next_token is None


async def test_list_filters_by_account_and_name(sar_service, transactions, suspicion, make_customer):
    await sar_service.create(make_customer(account_number="acc-1"), transactions, suspicion)
    await sar_service.create(make_customer(account_number="ACC-2"), transactions, suspicion)
    await sar_service.create(make_customer(first_name="John", account_number="ACC-1"), transactions, suspicion)

    by_account = await sar_service.list(ListQuery(account_number="ACC-1"))
    by_name = await sar_service.list(ListQuery(customer_name="jane"))

    assert sorted(s.account_number for s in by_account.sars) == ["ACC-1", "acc-1"]
    assert {s.customer_name for s in by_name.sars} == {"Jane Doe"}
    assert by_name.total_count == 2


async def test_list_filters_by_status(sar_service, customer, transactions, suspicion):
    first = await sar_service.create(customer, transactions, suspicion)
    await sar_service.create(customer, transactions, suspicion)
    await sar_service.submit(first.id)

    page = await sar_service.list(ListQuery(status=SarStatus.SUBMITTED))

    assert [s.id for s in page.sars] == [first.id]


async def test_list_respects_limit(sar_service, customer, transactions, suspicion):
    for _ in range(5):
        await sar_service.create(customer, transactions, suspicion)

    page = await sar_service.list(ListQuery(limit=3))

    assert len(page.sars) == 3
    assert page.next_token == CONTINUATION_MARKER


# ---------- store failures ----------


async def test_store_failure_on_save_propagates(clock, logger, customer, transactions, suspicion):
    store = AsyncMock()
    store.save = AsyncMock(side_effect=StoreUnavailableError("timeout"))
    service = SarService(store=store, clock=clock, logger=logger)

    with pytest.raises(StoreUnavailableError):
        await service.create(customer, transactions, suspicion)
    logger.error.assert_called_once()


async def test_store_failure_on_delete_propagates(clock, logger, draft):
    store = AsyncMock()
    store.load = AsyncMock(return_value=draft)
    store.delete = AsyncMock(side_effect=StoreUnavailableError("timeout"))
    service = SarService(store=store, clock=clock, logger=logger)

    with pytest.raises(StoreUnavailableError):
        await service.delete(draft.id)
    logger.error.assert_called_once()


async def test_delete_race_reports_not_found(clock, logger, draft):
    store = AsyncMock()
    store.load = AsyncMock(return_value=draft)
    store.delete = AsyncMock(return_value=False)
    service = SarService(store=store, clock=clock, logger=logger)

    with pytest.raises(SarNotFoundError):
        await service.delete(draft.id)
