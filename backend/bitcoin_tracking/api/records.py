from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, Response, status

from bitcoin_tracking.api import deps
from bitcoin_tracking.core.errors import ValidationError
from bitcoin_tracking.models.records import SavedRecord
from bitcoin_tracking.schemas.records import (
    RecordCreate,
    RecordNoteUpdate,
    RecordPage,
    RecordResponse,
    RecordsDeleteResponse,
)
from bitcoin_tracking.services.records import RecordService

router = APIRouter(prefix="/records", tags=["records"])


@router.get("/", response_model=list[RecordResponse])
def list_records(service: RecordService = Depends(deps.get_record_service)) -> list[SavedRecord]:
    return service.list_records()


@router.get("/paged", response_model=RecordPage)
def list_records_page(
    page: int = Query(1),
    page_size: int = Query(10),
    service: RecordService = Depends(deps.get_record_service),
) -> RecordPage:
    items, total = service.list_page(page, page_size)
    return RecordPage(
        items=[RecordResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{record_id}", response_model=RecordResponse)
def get_record(record_id: int, service: RecordService = Depends(deps.get_record_service)) -> SavedRecord:
    return service.get_record(record_id)


@router.post("/", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
def create_record(
    payload: RecordCreate,
    service: RecordService = Depends(deps.get_record_service),
) -> SavedRecord:
    return service.create_record(
        price_btc_eur=payload.price_btc_eur,
        rate_eur_czk=payload.rate_eur_czk,
        price_btc_czk=payload.price_btc_czk,
        note=payload.note,
        timestamp=payload.timestamp,
    )


@router.put("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_record_note(
    record_id: int,
    payload: RecordNoteUpdate,
    service: RecordService = Depends(deps.get_record_service),
) -> Response:
    if payload.id != record_id:
        raise ValidationError(["ID in URL does not match ID in body."])
    service.update_note(record_id, payload.note)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(record_id: int, service: RecordService = Depends(deps.get_record_service)) -> Response:
    service.delete_record(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", response_model=RecordsDeleteResponse)
def delete_records(
    record_ids: list[int] = Body(...),
    service: RecordService = Depends(deps.get_record_service),
) -> RecordsDeleteResponse:
    deleted = service.delete_records(record_ids)
    return RecordsDeleteResponse(deleted_count=deleted, message=f"Deleted {deleted} record(s)")
