"""
Record request/response schemas.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from records_api.models.record import RecordStatus


class RecordCreate(BaseModel):
    """Create record request."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    name: str = Field(..., min_length=1, description="Full name of the deceased")
    date_of_death: date = Field(..., description="Date of death (YYYY-MM-DD)")
    ssn: str = Field(..., min_length=1, description="Social security number")
    status: RecordStatus = Field(default=RecordStatus.PENDING, description="Initial status")
    document_verified: bool = Field(default=False, description="Documents verified")
    medical_notes: Optional[str] = Field(None, description="Medical notes")
    verified_by: Optional[str] = Field(None, description="Verifier")


# Fields that may be omitted from an update but never set to null
_NON_NULLABLE_FIELDS = ("name", "date_of_death", "ssn", "status", "document_verified")


class RecordUpdate(BaseModel):
    """Partial record update. Only fields present in the body are written."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    name: Optional[str] = Field(None, min_length=1)
    date_of_death: Optional[date] = None
    ssn: Optional[str] = Field(None, min_length=1)
    status: Optional[RecordStatus] = None
    document_verified: Optional[bool] = None
    medical_notes: Optional[str] = None
    verified_by: Optional[str] = None

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> "RecordUpdate":
        for field in _NON_NULLABLE_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class RecordStats(BaseModel):
    """Record counts by status."""
    total: int = Field(..., description="All records")
    pending: int = Field(..., description="Records awaiting verification")
    verified: int = Field(..., description="Verified records")
    processed: int = Field(..., description="Processed records")


class MessageResponse(BaseModel):
    """Plain confirmation or error message."""
    message: str
