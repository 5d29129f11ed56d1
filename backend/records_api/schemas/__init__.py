"""
Request and response schemas for API endpoints.
"""
from records_api.schemas.auth import (
    CredentialsRequest,
    SigninResponse,
    TokenPayload,
)
from records_api.schemas.record import (
    MessageResponse,
    RecordCreate,
    RecordStats,
    RecordUpdate,
)

__all__ = [
    # Auth
    "CredentialsRequest",
    "SigninResponse",
    "TokenPayload",
    # Records
    "MessageResponse",
    "RecordCreate",
    "RecordStats",
    "RecordUpdate",
]
