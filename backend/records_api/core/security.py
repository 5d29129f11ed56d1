"""
Password hashing (bcrypt) and JWT access tokens.

Tokens carry the account id in ``sub`` and always expire; there are no roles.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from records_api.config import Settings, get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return the salted bcrypt hash of a password."""
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Check a password against a stored hash.

    A missing hash never verifies, but the cost of one bcrypt round is still
    paid so unknown usernames and legacy accounts answer in the same time.
    """
    if not hashed_password:
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    account_id: str,
    settings: Optional[Settings] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed token for ``account_id``.

    The lifetime is ``expires_delta`` when given, otherwise
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    settings = settings or get_settings()
    lifetime = expires_delta
    if lifetime is None:
        lifetime = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    issued_at = datetime.now(timezone.utc)
    claims = {"sub": account_id, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Optional[Settings] = None) -> dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        JWTError: If the token is malformed, signed with another key,
            expired, or has no ``exp`` or ``sub`` claim
    """
    settings = settings or get_settings()
    claims = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require_exp": True, "require_sub": True},
    )
    if not claims.get("sub"):
        raise JWTError("Token has no subject")
    return claims
