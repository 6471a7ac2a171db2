from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from statsync.api.deps import get_upsert_service, require_api_key
from statsync.schemas.sync import ErrorOut, SyncStatsOut, parse_players
from statsync.services.errors import MethodError, ValidationError
from statsync.services.player_stats import BatchUpsertService

router = APIRouter(prefix="/api", tags=["sync"])

SYNC_PATH = "/sync-stats"
REJECTED_METHODS = ["GET", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.post(
    SYNC_PATH,
    response_model=SyncStatsOut,
    responses={
        400: {"model": ErrorOut},
        401: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
    dependencies=[Depends(require_api_key)],
)
async def sync_stats(
    request: Request,
    service: BatchUpsertService = Depends(get_upsert_service),
) -> SyncStatsOut:
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError()
    records = parse_players(payload)

    result = await run_in_threadpool(service.upsert_batch, records)
    return SyncStatsOut(
        success=result.success,
        message=f"Successfully processed {result.processed} players",
        processed=result.processed,
    )


@router.api_route(SYNC_PATH, methods=REJECTED_METHODS, include_in_schema=False)
def reject_method() -> None:
    raise MethodError()
