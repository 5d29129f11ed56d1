"""
Authentication service for account signup and signin.
"""
import logging
from typing import Optional

from records_api.config import Settings, get_settings
from records_api.core.exceptions import CredentialsFormatError, IncorrectCredentialsError
from records_api.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from records_api.models.user import Account
from records_api.repositories.account_repository import AccountRepository
from records_api.schemas.auth import SigninResponse

logger = logging.getLogger(__name__)

MIN_CREDENTIAL_LENGTH = 8
MAX_CREDENTIAL_LENGTH = 30


def validate_credentials(username: str, password: str) -> None:
    """
    Check that username and password are each 8-30 characters.

    Raises:
        CredentialsFormatError: If either value is out of range
    """
    for value in (username, password):
        if not MIN_CREDENTIAL_LENGTH <= len(value) <= MAX_CREDENTIAL_LENGTH:
            raise CredentialsFormatError(
                "Username and password must be between "
                f"{MIN_CREDENTIAL_LENGTH} and {MAX_CREDENTIAL_LENGTH} characters"
            )


class AuthService:
    """Service for authentication operations."""

    def __init__(self, accounts: AccountRepository, settings: Optional[Settings] = None):
        """Initialize with the account repository."""
        self.accounts = accounts
        self.settings = settings or get_settings()

    async def signup(self, username: str, password: str) -> Account:
        """
        Register a new account.

        Args:
            username: Account username
            password: Plain password, stored only as a bcrypt hash

        Returns:
            The created Account

        Raises:
            CredentialsFormatError: If username or password has the wrong length
            AccountExistsError: If the username is taken (unique index enabled)
        """
        validate_credentials(username, password)
        account = await self.accounts.create(username, hash_password(password))
        logger.info("Account created: %s", account.id)
        return account

    async def signin(self, username: str, password: str) -> SigninResponse:
        """
        Authenticate an account and return a JWT token.

        Usernames are not unique, so every account with the submitted username
        is tried and the first whose password verifies wins.

        Raises:
            CredentialsFormatError: If username or password has the wrong length
            IncorrectCredentialsError: If no account matches
        """
        validate_credentials(username, password)

        candidates = await self.accounts.find_by_username(username)
        account = self._match(candidates, password)
        if account is None:
            raise IncorrectCredentialsError("Incorrect username or password")

        token = create_access_token(account.id, settings=self.settings)
        return SigninResponse(
            token=token,
            expires_in=self.settings.jwt_access_token_expire_minutes * 60,
        )

    @staticmethod
    def _match(candidates: list[Account], password: str) -> Optional[Account]:
        if not candidates:
            # Unknown username: still pay for one hash comparison
            verify_password(password, None)
            return None
        for account in candidates:
            if verify_password(password, account.password_hash):
                return account
        return None
