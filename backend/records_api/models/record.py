"""
Record model for the records collection.
"""
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RecordStatus(str, Enum):
    """Verification workflow status of a record."""
    PENDING = "pending"
    VERIFIED = "verified"
    PROCESSED = "processed"


def ensure_utc(value: Any) -> Any:
    """Treat naive datetimes coming back from MongoDB as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return value


def date_to_datetime(value: date) -> datetime:
    """BSON has no date type; store dates as UTC midnight."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


class Record(BaseModel):
    """
    Record document model for MongoDB records_db.records collection.

    Field names are snake_case in Python and camelCase in MongoDB and JSON.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    id: str = Field(..., alias="_id", description="MongoDB ObjectId as string")
    name: str = Field(..., description="Full name of the deceased")
    date_of_death: date = Field(..., description="Date of death")
    ssn: str = Field(..., description="Social security number (unique)")
    status: RecordStatus = Field(
        default=RecordStatus.PENDING,
        description="Verification status"
    )
    document_verified: bool = Field(
        default=False,
        description="Whether supporting documents were verified"
    )
    last_updated: datetime = Field(..., description="Last modification timestamp")
    medical_notes: Optional[str] = Field(None, description="Free-form medical notes")
    verified_by: Optional[str] = Field(None, description="Who verified the record")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last write timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, value: Any) -> Any:
        return value if isinstance(value, str) else str(value)

    @field_validator("date_of_death", mode="before")
    @classmethod
    def _datetime_to_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return ensure_utc(value).date()
        return value

    @field_validator("last_updated", "created_at", "updated_at", mode="before")
    @classmethod
    def _as_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @classmethod
    def from_document(cls, doc: dict) -> "Record":
        """Build a Record from a raw MongoDB document."""
        return cls.model_validate(doc)
