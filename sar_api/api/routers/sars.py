"""SAR API router: create, get, list, update, delete, submit, file under /api/sar."""

from datetime import date, datetime
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from sar_api.api.dependencies import get_clock, get_sar_service
from sar_api.application.query_engine import ListQuery
from sar_api.application.sar_service import SarService
from sar_api.config.settings import get_settings
from sar_api.core.clock import Clock
from sar_api.domain.models.sar import (
    Address,
    CustomerInformation,
    SarChanges,
    SarStatus,
    SuspicionDetails,
    SuspiciousActivityReport,
    TransactionDetail,
)
from sar_api.domain.schemas.sar import (
    ApiResponse,
    CreateSarRequest,
    CustomerInformationSchema,
    FileSarRequest,
    SarListResponse,
    SarResponse,
    SarSummaryResponse,
    SuspicionDetailsSchema,
    TransactionDetailSchema,
    UpdateSarRequest,
)
from sar_api.domain.validators.sar_validator import (
    raise_for_errors,
    validate_create_sar,
    validate_sar_changes,
)

router = APIRouter()


def _to_customer(schema: CustomerInformationSchema) -> CustomerInformation:
    return CustomerInformation(
        first_name=schema.first_name,
        last_name=schema.last_name,
        middle_name=schema.middle_name,
        date_of_birth=schema.date_of_birth,
        social_security_number=schema.social_security_number,
        address=Address(**schema.address.model_dump()),
        phone_number=schema.phone_number,
        email_address=schema.email_address,
        account_number=schema.account_number,
        customer_type=schema.customer_type,
    )


def _to_transactions(schemas: List[TransactionDetailSchema]) -> tuple[TransactionDetail, ...]:
    return tuple(TransactionDetail(**t.model_dump()) for t in schemas)


def _to_suspicion(schema: SuspicionDetailsSchema) -> SuspicionDetails:
    data = schema.model_dump()
    data["additional_reasons"] = tuple(schema.additional_reasons)
    return SuspicionDetails(**data)


def _today(clock: Clock) -> date:
    return clock.now().date()


def _sar_envelope(sar: SuspiciousActivityReport, message: Optional[str] = None) -> ApiResponse[SarResponse]:
    return ApiResponse[SarResponse](success=True, data=SarResponse.model_validate(sar), message=message)


def _not_found(sar_id: str) -> JSONResponse:
    body = ApiResponse(success=False, message=f"SAR with ID {sar_id} not found")
    return JSONResponse(status_code=404, content=body.model_dump(by_alias=True, mode="json"))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[SarResponse])
async def create_sar(
    body: CreateSarRequest,
    sar_service: Annotated[SarService, Depends(get_sar_service)],
    clock: Annotated[Clock, Depends(get_clock)],
):
    """Create a Draft SAR. Domain validation runs here, before the service is called."""
    customer = _to_customer(body.customer)
    transactions = _to_transactions(body.transactions)
    suspicion = _to_suspicion(body.suspicion)
    raise_for_errors(validate_create_sar(customer, transactions, suspicion, _today(clock)))

    sar = await sar_service.create(customer, transactions, suspicion)
    return _sar_envelope(sar, "SAR created successfully")


@router.get("", response_model=ApiResponse[SarListResponse])
async def list_sars(
    sar_service: Annotated[SarService, Depends(get_sar_service)],
    status_filter: Annotated[Optional[SarStatus], Query(alias="status")] = None,
    created_after: Annotated[Optional[datetime], Query(alias="createdAfter")] = None,
    created_before: Annotated[Optional[datetime], Query(alias="createdBefore")] = None,
    customer_name: Annotated[Optional[str], Query(alias="customerName")] = None,
    account_number: Annotated[Optional[str], Query(alias="accountNumber")] = None,
    limit: Annotated[Optional[int], Query()] = None,
    next_token: Annotated[Optional[str], Query(alias="nextToken")] = None,
):
    """List SAR summaries. limit is clamped to [1, list_max_limit]."""
    query = ListQuery(
        status=status_filter,
        created_after=created_after,
        created_before=created_before,
        customer_name=customer_name,
        account_number=account_number,
        limit=limit if limit is not None else get_settings().list_default_limit,
        continuation=next_token,
    )
    page = await sar_service.list(query)
    data = SarListResponse(
        sars=[SarSummaryResponse.model_validate(s) for s in page.sars],
        total_count=page.total_count,
        next_token=page.next_token,
    )
    return ApiResponse[SarListResponse](success=True, data=data)


@router.get("/{sar_id}", response_model=ApiResponse[SarResponse])
async def get_sar(
    sar_id: str,
    sar_service: Annotated[SarService, Depends(get_sar_service)],
):
    sar = await sar_service.get_by_id(sar_id)
    if sar is None:
        return _not_found(sar_id)
    return _sar_envelope(sar)


@router.put("/{sar_id}", response_model=ApiResponse[SarResponse])
async def update_sar(
    sar_id: str,
    body: UpdateSarRequest,
    sar_service: Annotated[SarService, Depends(get_sar_service)],
    clock: Annotated[Clock, Depends(get_clock)],
):
    """Partial update. Omitted sections keep their stored values."""
    changes = SarChanges(
        customer=_to_customer(body.customer) if body.customer is not None else None,
        transactions=_to_transactions(body.transactions) if body.transactions is not None else None,
        suspicion=_to_suspicion(body.suspicion) if body.suspicion is not None else None,
    )
    raise_for_errors(validate_sar_changes(changes, _today(clock)))

    sar = await sar_service.update(sar_id, changes)
    return _sar_envelope(sar, "SAR updated successfully")


@router.delete("/{sar_id}", response_model=ApiResponse)
async def delete_sar(
    sar_id: str,
    sar_service: Annotated[SarService, Depends(get_sar_service)],
):
    await sar_service.delete(sar_id)
    return ApiResponse(success=True, message="SAR deleted successfully")


@router.post("/{sar_id}/submit", response_model=ApiResponse[SarResponse])
async def submit_sar(
    sar_id: str,
    sar_service: Annotated[SarService, Depends(get_sar_service)],
):
    sar = await sar_service.submit(sar_id)
    return _sar_envelope(sar, "SAR submitted successfully")


@router.post("/{sar_id}/file", response_model=ApiResponse[SarResponse])
async def file_sar(
    sar_id: str,
    body: FileSarRequest,
    sar_service: Annotated[SarService, Depends(get_sar_service)],
):
    sar = await sar_service.file(sar_id, body.filing_reference)
    return _sar_envelope(sar, "SAR filed successfully")
