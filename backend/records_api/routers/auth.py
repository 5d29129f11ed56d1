"""
Authentication router for signup and signin.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from records_api.config import Settings
from records_api.core.exceptions import (
    AccountExistsError,
    CredentialsFormatError,
    IncorrectCredentialsError,
    PersistenceError,
)
from records_api.database.connections import PersistenceClient
from records_api.dependencies.persistence import get_app_settings, get_persistence
from records_api.repositories.account_repository import AccountRepository
from records_api.schemas.auth import CredentialsRequest, SigninResponse
from records_api.schemas.record import MessageResponse
from records_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


async def get_auth_service(
    persistence: PersistenceClient = Depends(get_persistence),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(AccountRepository(persistence), settings)


@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def signup(
    body: CredentialsRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Create a new account.

    - **username**: 8-30 characters
    - **password**: 8-30 characters, stored hashed
    """
    try:
        await auth_service.signup(body.username, body.password)
    except CredentialsFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AccountExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PersistenceError:
        logger.exception("Error creating account")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating account",
        )

    return MessageResponse(message="Account created successfully")


@router.post(
    "/signin",
    response_model=SigninResponse,
    summary="Sign in and get a bearer token",
)
async def signin(
    body: CredentialsRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with username and password to receive a JWT token.

    Send the token on protected endpoints as `Authorization: Bearer <token>`.
    """
    try:
        return await auth_service.signin(body.username, body.password)
    except (CredentialsFormatError, IncorrectCredentialsError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError:
        logger.exception("Error signing in")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error signing in",
        )
