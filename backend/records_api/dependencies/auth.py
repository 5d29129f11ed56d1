"""
Access gate: bearer token verification for protected routes.
"""
import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from records_api.config import Settings
from records_api.core.security import decode_token
from records_api.dependencies.persistence import get_app_settings
from records_api.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401 by us, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_account(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenPayload:
    """
    Dependency that verifies the ``Authorization: Bearer <token>`` header.

    On success the account id is stored on ``request.state.account_id``.

    Raises:
        HTTPException 401: If the token is missing, malformed, tampered with
            or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials, settings)
    except JWTError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise credentials_exception

    request.state.account_id = payload["sub"]
    return TokenPayload(**payload)


# Type alias for cleaner route signatures
CurrentAccount = Annotated[TokenPayload, Depends(get_current_account)]
