"""
Base repository - shared access to the persistence client and driver error
translation.
"""
from contextlib import contextmanager
from typing import Iterator

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from records_api.core.exceptions import PersistenceError
from records_api.database.connections import PersistenceClient


def parse_object_id(value: str) -> ObjectId:
    """
    Parse a string id into an ObjectId.

    Raises:
        ValueError: If the string is not a valid ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise ValueError(f"Invalid ObjectId: {value!r}") from e


class MongoRepository:
    """Base class for repositories backed by one MongoDB collection."""

    collection_name: str

    def __init__(self, persistence: PersistenceClient):
        self.persistence = persistence

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """
        Resolved on every access so a reconnect is picked up transparently.

        Raises:
            PersistenceUnavailableError: If MongoDB is not connected
        """
        return self.persistence.collection(self.collection_name)

    @contextmanager
    def _driver_errors(self, action: str) -> Iterator[None]:
        """Translate driver errors raised inside the block into PersistenceError."""
        try:
            yield
        except PyMongoError as e:
            self.persistence.report_failure(e)
            raise PersistenceError(f"Failed to {action}") from e
