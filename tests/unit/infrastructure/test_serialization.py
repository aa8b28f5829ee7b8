"""Document mapping tests: exact decimals, ISO timestamps, enum values."""

import json
from dataclasses import replace
from decimal import Decimal

from sar_api.domain.models.sar import SarStatus, SuspicionReason, SuspiciousActivityReport
from sar_api.infrastructure.serialization import sar_from_json, sar_to_document, sar_to_json


def test_filed_sar_document(clock, customer, transactions, suspicion):
    sar = SuspiciousActivityReport(
        id="sar-1",
        created_at=clock.now(),
        updated_at=clock.now(),
        status=SarStatus.FILED,
        customer=customer,
        transactions=transactions,
        suspicion=replace(
            suspicion,
            suspicion_identified_date=clock.now(),
            additional_reasons=(SuspicionReason.GEOGRAPHIC_RISK,),
        ),
        filing_reference="FIL-001",
        filed_at=clock.now(),
    )

    doc = sar_to_document(sar)

    assert doc["status"] == "Filed"
    assert doc["created_at"] == "2026-03-14T09:30:00+00:00"
    assert doc["customer"]["date_of_birth"] == "1985-06-01"
    assert [t["amount"] for t in doc["transactions"]] == ["100.00", "250.50"]
    assert doc["suspicion"]["primary_reason"] == "StructuredTransaction"
    assert doc["suspicion"]["additional_reasons"] == ["GeographicRisk"]
    assert doc["filing_reference"] == "FIL-001"

    restored = sar_from_json(sar_to_json(sar))
    assert restored == sar
    assert sum(t.amount for t in restored.transactions) == Decimal("350.50")


def test_document_accepts_zulu_timestamps(clock, customer, transactions, suspicion):
    sar = SuspiciousActivityReport(
        id="sar-2",
        created_at=clock.now(),
        updated_at=clock.now(),
        status=SarStatus.DRAFT,
        customer=customer,
        transactions=transactions,
        suspicion=suspicion,
    )
    doc = json.loads(sar_to_json(sar))
    doc["created_at"] = "2026-03-14T09:30:00Z"

    assert sar_from_json(json.dumps(doc)).created_at == clock.now()
