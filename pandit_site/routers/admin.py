import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pandit_site.dependencies import get_owner_oracle, get_record_store
from pandit_site.models.admin import SLUGGED_TABLES, AdminTable, RecordListResponse
from pandit_site.rate_limit import limiter
from pandit_site.services.auth import OwnerOracle
from pandit_site.services.normalizer import generate_slug
from pandit_site.services.records import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def require_owner(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    oracle: OwnerOracle = Depends(get_owner_oracle),
) -> None:
    token = credentials.credentials if credentials else None
    if not await oracle.is_owner(token):
        raise HTTPException(status_code=403, detail="Owner access is required.")


router = APIRouter(prefix="/admin/api", tags=["Admin"], dependencies=[Depends(require_owner)])


@router.get("/{table}", response_model=RecordListResponse, summary="List records of a table")
@limiter.limit("30/minute")
async def list_records(
    request: Request,
    table: AdminTable,
    records: RecordStore = Depends(get_record_store),
) -> RecordListResponse:
    try:
        rows = await records.list_records(table.value)
    except RecordStoreError as exc:
        logger.error("Error listing %s: %s", table.value, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    return RecordListResponse(table=table, count=len(rows), records=rows)


@router.post("/{table}", status_code=201, summary="Create a record")
@limiter.limit("30/minute")
async def create_record(
    request: Request,
    table: AdminTable,
    data: Dict[str, Any] = Body(...),
    records: RecordStore = Depends(get_record_store),
) -> Dict[str, Any]:
    """Insert *data* into *table*.

    For slug-addressed tables a missing ``slug`` is generated from the
    record's ``title`` (or ``name``).
    """
    if table in SLUGGED_TABLES and not data.get("slug"):
        source = data.get("title") or data.get("name")
        if source:
            data["slug"] = generate_slug(str(source))

    try:
        return await records.create_record(table.value, data)
    except RecordStoreError as exc:
        logger.error("Error creating %s record: %s", table.value, exc)
        raise HTTPException(status_code=502, detail=str(exc))


@router.patch("/{table}/{record_id}", summary="Update a record")
@limiter.limit("30/minute")
async def update_record(
    request: Request,
    table: AdminTable,
    record_id: str,
    data: Dict[str, Any] = Body(...),
    records: RecordStore = Depends(get_record_store),
) -> Dict[str, Any]:
    try:
        row = await records.update_record(table.value, record_id, data)
    except RecordStoreError as exc:
        logger.error("Error updating %s/%s: %s", table.value, record_id, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    if row is None:
        raise HTTPException(status_code=404, detail="Record not found.")
    return row


@router.delete("/{table}/{record_id}", status_code=204, summary="Delete a record")
@limiter.limit("30/minute")
async def delete_record(
    request: Request,
    table: AdminTable,
    record_id: str,
    records: RecordStore = Depends(get_record_store),
) -> Response:
    try:
        await records.delete_record(table.value, record_id)
    except RecordStoreError as exc:
        logger.error("Error deleting %s/%s: %s", table.value, record_id, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    return Response(status_code=204)
