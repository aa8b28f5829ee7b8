"""JSON document mapping for SAR records. Shared by the Redis and database stores."""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sar_api.domain.models.sar import (
    Address,
    CustomerInformation,
    SarStatus,
    SuspicionDetails,
    SuspicionReason,
    SuspiciousActivityReport,
    TransactionDetail,
)


def _dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def sar_to_document(sar: SuspiciousActivityReport) -> Dict[str, Any]:
    """Plain JSON-compatible dict. Decimals are strings so amounts survive exactly."""
    customer = sar.customer
    suspicion = sar.suspicion
    return {
        "id": sar.id,
        "created_at": _dt(sar.created_at),
        "updated_at": _dt(sar.updated_at),
        "status": sar.status.value,
        "customer": {
            "first_name": customer.first_name,
            "last_name": customer.last_name,
            "middle_name": customer.middle_name,
            "date_of_birth": customer.date_of_birth.isoformat(),
            "social_security_number": customer.social_security_number,
            "address": {
                "street": customer.address.street,
                "city": customer.address.city,
                "state": customer.address.state,
                "zip_code": customer.address.zip_code,
                "country": customer.address.country,
            },
            "phone_number": customer.phone_number,
            "email_address": customer.email_address,
            "account_number": customer.account_number,
            "customer_type": customer.customer_type,
        },
        "transactions": [
            {
                "transaction_id": t.transaction_id,
                "transaction_date": _dt(t.transaction_date),
                "amount": str(t.amount),
                "transaction_type": t.transaction_type,
                "description": t.description,
                "counterparty_name": t.counterparty_name,
                "counterparty_account": t.counterparty_account,
                "counterparty_bank": t.counterparty_bank,
                "location": t.location,
            }
            for t in sar.transactions
        ],
        "suspicion": {
            "primary_reason": suspicion.primary_reason.value,
            "additional_reasons": [r.value for r in suspicion.additional_reasons],
            "description": suspicion.description,
            "suspicion_identified_date": _dt(suspicion.suspicion_identified_date),
            "investigation_notes": suspicion.investigation_notes,
            "prior_sars_on_customer": suspicion.prior_sars_on_customer,
            "regulatory_guidance_reference": suspicion.regulatory_guidance_reference,
        },
        "filing_reference": sar.filing_reference,
        "filed_at": _dt(sar.filed_at),
    }


def sar_from_document(data: Dict[str, Any]) -> SuspiciousActivityReport:
    customer = data["customer"]
    suspicion = data["suspicion"]
    return SuspiciousActivityReport(
        id=data["id"],
        created_at=_parse_dt(data["created_at"]),
        updated_at=_parse_dt(data["updated_at"]),
        status=SarStatus(data["status"]),
        customer=CustomerInformation(
            first_name=customer["first_name"],
            last_name=customer["last_name"],
            middle_name=customer.get("middle_name"),
            date_of_birth=date.fromisoformat(customer["date_of_birth"]),
            social_security_number=customer["social_security_number"],
            address=Address(**customer["address"]),
            phone_number=customer.get("phone_number"),
            email_address=customer.get("email_address"),
            account_number=customer["account_number"],
            customer_type=customer.get("customer_type"),
        ),
        transactions=tuple(
            TransactionDetail(
                transaction_id=t["transaction_id"],
                transaction_date=_parse_dt(t["transaction_date"]),
                amount=Decimal(t["amount"]),
                transaction_type=t["transaction_type"],
                description=t.get("description"),
                counterparty_name=t.get("counterparty_name"),
                counterparty_account=t.get("counterparty_account"),
                counterparty_bank=t.get("counterparty_bank"),
                location=t.get("location"),
            )
            for t in data["transactions"]
        ),
        suspicion=SuspicionDetails(
            primary_reason=SuspicionReason(suspicion["primary_reason"]),
            additional_reasons=tuple(SuspicionReason(r) for r in suspicion.get("additional_reasons", [])),
            description=suspicion["description"],
            suspicion_identified_date=_parse_dt(suspicion.get("suspicion_identified_date")),
            investigation_notes=suspicion.get("investigation_notes"),
            prior_sars_on_customer=bool(suspicion.get("prior_sars_on_customer", False)),
            regulatory_guidance_reference=suspicion.get("regulatory_guidance_reference"),
        ),
        filing_reference=data.get("filing_reference"),
        filed_at=_parse_dt(data.get("filed_at")),
    )


def sar_to_json(sar: SuspiciousActivityReport) -> str:
    return json.dumps(sar_to_document(sar))


def sar_from_json(raw: str) -> SuspiciousActivityReport:
    return sar_from_document(json.loads(raw))
