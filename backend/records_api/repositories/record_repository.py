"""
Record repository - CRUD and statistics over the records collection.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from records_api.core.exceptions import (
    DuplicateSsnError,
    InvalidRecordIdError,
    RecordNotFoundError,
)
from records_api.database.databases import records_db
from records_api.models.record import Record, RecordStatus, date_to_datetime, ensure_utc
from records_api.repositories.base import MongoRepository, parse_object_id
from records_api.schemas.record import RecordCreate, RecordStats, RecordUpdate


def _utcnow() -> datetime:
    """Current UTC time at BSON (millisecond) precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _next_stamp(previous: Optional[datetime]) -> datetime:
    now = _utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(milliseconds=1)
    return now


def _to_document(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert aliased schema fields into a storable MongoDB document."""
    doc = dict(fields)
    if doc.get("dateOfDeath") is not None:
        doc["dateOfDeath"] = date_to_datetime(doc["dateOfDeath"])
    return doc


class RecordRepository(MongoRepository):
    """Repository for death records."""

    collection_name = records_db.Collections.RECORDS

    def _record_id(self, record_id: str) -> ObjectId:
        try:
            return parse_object_id(record_id)
        except ValueError as e:
            raise InvalidRecordIdError(record_id) from e

    async def list_all(self) -> list[Record]:
        """All records, most recently updated first."""
        with self._driver_errors("list records"):
            cursor = self.collection.find().sort("lastUpdated", DESCENDING)
            docs = await cursor.to_list(length=None)
        return [Record.from_document(doc) for doc in docs]

    async def get_by_id(self, record_id: str) -> Record:
        """
        Get one record.

        Raises:
            InvalidRecordIdError: If ``record_id`` is not a valid ObjectId
            RecordNotFoundError: If no record has this id
        """
        oid = self._record_id(record_id)
        with self._driver_errors("fetch record"):
            doc = await self.collection.find_one({"_id": oid})
        if doc is None:
            raise RecordNotFoundError(record_id)
        return Record.from_document(doc)

    async def create(self, request: RecordCreate) -> Record:
        """
        Insert a new record with defaults filled in.

        Raises:
            DuplicateSsnError: If another record already has this ssn
        """
        now = _utcnow()
        doc = _to_document(request.model_dump(by_alias=True, exclude_none=True))
        doc.update({"lastUpdated": now, "createdAt": now, "updatedAt": now})

        with self._driver_errors("create record"):
            try:
                result = await self.collection.insert_one(doc)
            except DuplicateKeyError as e:
                raise DuplicateSsnError("A record with this SSN already exists") from e

        doc["_id"] = result.inserted_id
        return Record.from_document(doc)

    async def update(self, record_id: str, request: RecordUpdate) -> Record:
        """
        Merge the supplied fields into a record and refresh lastUpdated.

        The new lastUpdated is strictly later than the stored one even when
        both fall in the same millisecond. The write is conditional on the
        stored value, and is retried if another update lands in between.

        Raises:
            InvalidRecordIdError: If ``record_id`` is not a valid ObjectId
            RecordNotFoundError: If no record has this id
            DuplicateSsnError: If the new ssn belongs to another record
        """
        oid = self._record_id(record_id)
        changes = _to_document(request.model_dump(by_alias=True, exclude_unset=True))

        with self._driver_errors("update record"):
            while True:
                current = await self.collection.find_one({"_id": oid}, {"lastUpdated": 1})
                if current is None:
                    raise RecordNotFoundError(record_id)

                previous = current.get("lastUpdated")
                stamp = _next_stamp(ensure_utc(previous))
                changes.update({"lastUpdated": stamp, "updatedAt": stamp})

                try:
                    doc = await self.collection.find_one_and_update(
                        {"_id": oid, "lastUpdated": previous},
                        {"$set": changes},
                        return_document=ReturnDocument.AFTER,
                    )
                except DuplicateKeyError as e:
                    raise DuplicateSsnError("A record with this SSN already exists") from e

                if doc is not None:
                    return Record.from_document(doc)

    async def delete_by_id(self, record_id: str) -> None:
        """
        Remove a record permanently.

        Raises:
            InvalidRecordIdError: If ``record_id`` is not a valid ObjectId
            RecordNotFoundError: If no record has this id
        """
        oid = self._record_id(record_id)
        with self._driver_errors("delete record"):
            result = await self.collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise RecordNotFoundError(record_id)

    async def stats(self) -> RecordStats:
        """
        Count records in total and per status.

        Four independent queries, so the numbers may be momentarily
        inconsistent under concurrent writes.
        """
        with self._driver_errors("count records"):
            total = await self.collection.count_documents({})
            counts = {
                status.value: await self.collection.count_documents({"status": status.value})
                for status in RecordStatus
            }
        return RecordStats(total=total, **counts)
