"""
Statistics router.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from records_api.core.exceptions import PersistenceError
from records_api.dependencies.auth import get_current_account
from records_api.repositories.record_repository import RecordRepository
from records_api.routers.records import get_record_repository
from records_api.schemas.record import RecordStats

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Statistics"],
    dependencies=[Depends(get_current_account)],
)


@router.get(
    "/stats",
    response_model=RecordStats,
    summary="Record counts by status",
)
async def get_stats(
    repository: RecordRepository = Depends(get_record_repository),
):
    """Total number of records and the number in each status."""
    try:
        return await repository.stats()
    except PersistenceError:
        logger.exception("Error fetching statistics")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching statistics",
        )
