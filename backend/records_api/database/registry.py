"""
Index management for records_db.
Run every time the persistence client (re)connects.
"""
from pymongo import ASCENDING, DESCENDING
from motor.motor_asyncio import AsyncIOMotorDatabase

from records_api.database.databases import records_db


async def create_indexes(
    db: AsyncIOMotorDatabase,
    enforce_unique_usernames: bool = False,
) -> None:
    """Create necessary indexes for records_db."""

    # Records: ssn must be unique across all records
    records = db[records_db.Collections.RECORDS]
    await records.create_index("ssn", unique=True)
    await records.create_index([("lastUpdated", DESCENDING)])
    await records.create_index("status")

    # Users: usernames were never unique; only add the constraint on request
    if enforce_unique_usernames:
        users = db[records_db.Collections.USERS]
        await users.create_index([("username", ASCENDING)], unique=True)
