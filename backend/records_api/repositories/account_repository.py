"""
Account repository - create and look up login accounts.
"""
from datetime import datetime, timezone

from pymongo.errors import DuplicateKeyError

from records_api.core.exceptions import AccountExistsError
from records_api.database.databases import records_db
from records_api.models.user import Account
from records_api.repositories.base import MongoRepository


class AccountRepository(MongoRepository):
    """Repository for user accounts."""

    collection_name = records_db.Collections.USERS

    async def create(self, username: str, password_hash: str) -> Account:
        """
        Store a new account.

        Raises:
            AccountExistsError: If a unique username index rejects the insert
        """
        doc = {
            "username": username,
            "passwordHash": password_hash,
            "createdAt": datetime.now(timezone.utc),
        }
        with self._driver_errors("create account"):
            try:
                result = await self.collection.insert_one(doc)
            except DuplicateKeyError as e:
                raise AccountExistsError("Username already exists") from e

        doc["_id"] = result.inserted_id
        return Account.model_validate(doc)

    async def find_by_username(self, username: str) -> list[Account]:
        """All accounts with this username (usernames are not unique)."""
        with self._driver_errors("find accounts"):
            cursor = self.collection.find({"username": username})
            docs = await cursor.to_list(length=None)
        return [Account.model_validate(doc) for doc in docs]
