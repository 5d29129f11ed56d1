"""
Authentication request/response schemas.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CredentialsRequest(BaseModel):
    """
    Signup / signin request body.

    Length rules (8-30 characters) are checked by AuthService so that a bad
    shape is reported as a credentials error rather than a schema error.
    """
    username: str = Field(..., description="Account username (8-30 characters)")
    password: str = Field(..., description="Account password (8-30 characters)")


class SigninResponse(BaseModel):
    """Signin response with JWT token."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str = Field(..., description="JWT bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")


class TokenPayload(BaseModel):
    """Decoded JWT token payload."""
    sub: str = Field(..., description="Subject (account ID)")
    exp: datetime = Field(..., description="Expiration time")
    iat: datetime | None = Field(None, description="Issued at time")
