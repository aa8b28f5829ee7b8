"""Fixtures for API unit tests: in-memory record store, fixed clock, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from sar_api.main import app


@pytest.fixture
def app_with_overrides(store, clock):
    """App with record store and clock overridden for testing."""
    from sar_api.api import dependencies

    app.dependency_overrides[dependencies.get_record_store] = lambda: store
    app.dependency_overrides[dependencies.get_clock] = lambda: clock
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sar_payload():
    """Valid create request body in wire (camelCase) form."""
    return {
        "customer": {
            "firstName": "Jane",
            "lastName": "Doe",
            "dateOfBirth": "1985-06-01",
            "socialSecurityNumber": "123-45-6789",
            "address": {
                "street": "1 Main St",
                "city": "Springfield",
                "state": "IL",
                "zipCode": "62701",
            },
            "accountNumber": "ACC-1",
        },
        "transactions": [
            {
                "transactionId": "TX-1",
                "transactionDate": "2026-03-01T12:00:00Z",
                "amount": "100.00",
                "transactionType": "Wire",
            },
            {
                "transactionId": "TX-2",
                "transactionDate": "2026-03-02T12:00:00Z",
                "amount": "250.50",
                "transactionType": "Cash",
            },
        ],
        "suspicion": {
            "primaryReason": "StructuredTransaction",
            "description": "Repeated deposits just under the reporting threshold.",
        },
    }


@pytest.fixture
def create_sar(async_client, sar_payload):
    """POST a valid SAR and return the response data."""

    async def _create(**customer_overrides):
        payload = dict(sar_payload)
        payload["customer"] = {**sar_payload["customer"], **customer_overrides}
        r = await async_client.post("/api/sar", json=payload)
        assert r.status_code == 201
        return r.json()["data"]

    return _create
