"""
Records router for death record CRUD.

Every route requires a bearer token (see records_api.dependencies.auth).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from records_api.core.exceptions import (
    InvalidRecordIdError,
    PersistenceError,
    RecordNotFoundError,
    RecordValidationError,
)
from records_api.database.connections import PersistenceClient
from records_api.dependencies.auth import get_current_account
from records_api.dependencies.persistence import get_persistence
from records_api.models.record import Record
from records_api.repositories.record_repository import RecordRepository
from records_api.schemas.record import MessageResponse, RecordCreate, RecordUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/records",
    tags=["Records"],
    dependencies=[Depends(get_current_account)],
)


async def get_record_repository(
    persistence: PersistenceClient = Depends(get_persistence),
) -> RecordRepository:
    """Dependency to get RecordRepository instance."""
    return RecordRepository(persistence)


def _not_found(error: RecordNotFoundError) -> HTTPException:
    detail = "Invalid record id" if isinstance(error, InvalidRecordIdError) else "Record not found"
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _server_error(message: str) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get(
    "",
    response_model=list[Record],
    summary="List records",
)
async def list_records(
    repository: RecordRepository = Depends(get_record_repository),
):
    """List all records, most recently updated first."""
    try:
        return await repository.list_all()
    except PersistenceError:
        raise _server_error("Error fetching records")


@router.get(
    "/{record_id}",
    response_model=Record,
    summary="Get record",
)
async def get_record(
    record_id: str,
    repository: RecordRepository = Depends(get_record_repository),
):
    """Get a single record by id."""
    try:
        return await repository.get_by_id(record_id)
    except RecordNotFoundError as e:
        raise _not_found(e)
    except PersistenceError:
        raise _server_error("Error fetching record")


@router.post(
    "",
    response_model=Record,
    status_code=status.HTTP_201_CREATED,
    summary="Create record",
)
async def create_record(
    body: RecordCreate,
    repository: RecordRepository = Depends(get_record_repository),
):
    """
    Create a new record.

    - **name**, **dateOfDeath**, **ssn**: required; ssn must be unique
    - **status**: pending (default), verified or processed
    - **documentVerified**: defaults to false
    - **medicalNotes**, **verifiedBy**: optional
    """
    try:
        return await repository.create(body)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError:
        raise _server_error("Error creating record")


@router.put(
    "/{record_id}",
    response_model=Record,
    summary="Update record",
)
async def update_record(
    record_id: str,
    body: RecordUpdate,
    repository: RecordRepository = Depends(get_record_repository),
):
    """
    Update the supplied fields of a record.

    `lastUpdated` is always set to the current time.
    """
    try:
        return await repository.update(record_id, body)
    except RecordNotFoundError as e:
        raise _not_found(e)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError:
        raise _server_error("Error updating record")


@router.delete(
    "/{record_id}",
    response_model=MessageResponse,
    summary="Delete record",
)
async def delete_record(
    record_id: str,
    repository: RecordRepository = Depends(get_record_repository),
):
    """
    Delete a record.

    **Warning**: This action cannot be undone.
    """
    try:
        await repository.delete_by_id(record_id)
    except RecordNotFoundError as e:
        raise _not_found(e)
    except PersistenceError:
        raise _server_error("Error deleting record")

    return MessageResponse(message="Record deleted successfully")
