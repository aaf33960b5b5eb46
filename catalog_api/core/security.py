from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from catalog_api.config import settings


# Password hashing context for the optional ADMIN_PASSWORD_HASH setting
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
)

ADMIN_TOKEN_TYPE = "admin"


@dataclass
class AdminUser:
    """The back-office user carried by the session token."""
    username: str
    name: str
    role: str

    def to_dict(self) -> dict:
        return {"username": self.username, "name": self.name, "role": self.role}


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Malformed hashes count as a mismatch instead of raising.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt (used to produce ADMIN_PASSWORD_HASH)."""
    return pwd_context.hash(password)


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[dict[str, Any]] = None
) -> str:
    """
    Create a signed admin session token.

    Args:
        subject: The subject of the token (admin username)
        expires_delta: Optional custom expiration time
        additional_claims: Optional additional claims to include (name, role)

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": ADMIN_TOKEN_TYPE,
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate a JWT token (signature and expiry).

    Returns:
        Decoded token payload or None if invalid
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


def verify_access_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify an admin session token.

    Returns:
        The payload, or None if the token is invalid, expired or not an admin token
    """
    payload = decode_token(token)
    if payload is None:
        return None

    if payload.get("type") != ADMIN_TOKEN_TYPE or not payload.get("sub"):
        return None

    return payload
