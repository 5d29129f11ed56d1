"""
Account model for the users collection.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Account(BaseModel):
    """
    Account document model for MongoDB records_db.users collection.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., alias="_id", description="MongoDB ObjectId as string")
    username: str = Field(..., description="Login name (not guaranteed unique)")
    # Legacy plaintext accounts have no hash and can never sign in
    password_hash: Optional[str] = Field(None, description="Bcrypt hashed password")
    created_at: Optional[datetime] = Field(None, description="Account creation timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, value: Any) -> Any:
        return value if isinstance(value, str) else str(value)
