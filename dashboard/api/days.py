import logging

from fastapi import APIRouter, Depends, HTTPException

from database.manager import DatabaseError, DayStore
from shared.models import (
    ExportRequest,
    ExportResponse,
    ImportRequest,
    ImportResponse,
    blank_month,
)
from utils.datetime_utils import month_key
from ..dependencies import get_day_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["days"])


async def import_month(request: ImportRequest, store: DayStore) -> ImportResponse:
    """Stored month verbatim, or a blank month that is not persisted"""
    existing = await store.get(request.year, request.month)
    if existing is not None:
        return ImportResponse(days=existing)

    logger.info(f"No record for {month_key(request.year, request.month)}, synthesizing a blank month")
    return ImportResponse(days=blank_month(request.year, request.month))


async def export_month(request: ExportRequest, store: DayStore) -> ExportResponse:
    """Overwrite the whole stored month"""
    await store.set(request.year, request.month, request.days)
    return ExportResponse(ok=True)


@router.post("/import", response_model=ImportResponse)
async def post_import(
    body: ImportRequest,
    store: DayStore = Depends(get_day_store)
):
    try:
        return await import_month(body, store)
    except DatabaseError as e:
        logger.error(f"❌ Import of {month_key(body.year, body.month)} failed: {e}")
        raise HTTPException(status_code=500, detail=f"Could not read stored month: {e}")


@router.post("/export", response_model=ExportResponse)
async def post_export(
    body: ExportRequest,
    store: DayStore = Depends(get_day_store)
):
    try:
        return await export_month(body, store)
    except (DatabaseError, OSError) as e:
        logger.error(f"❌ Export of {month_key(body.year, body.month)} failed: {e}")
        raise HTTPException(status_code=500, detail=f"Could not store month: {e}")
