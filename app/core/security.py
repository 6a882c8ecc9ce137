from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ADMIN_TOKEN_TYPE = "admin"
ADMIN_SUBJECT = "admin"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt (used to produce ADMIN_PASSWORD_HASH)."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash. No hash configured means no match."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash in the environment
        return False


def create_admin_token(expires_delta: Optional[timedelta] = None) -> str:
    """
    Create the signed admin session token stored in the admin cookie.

    Args:
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.admin_session_expire_hours)

    to_encode = {
        "sub": ADMIN_SUBJECT,
        "exp": expire,
        "type": ADMIN_TOKEN_TYPE,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
        return payload
    except JWTError:
        return None


def verify_admin_token(token: Optional[str]) -> bool:
    """True only for an unexpired, correctly signed admin token."""
    if not token:
        return False

    payload = decode_token(token)
    if payload is None:
        return False

    return payload.get("type") == ADMIN_TOKEN_TYPE and payload.get("sub") == ADMIN_SUBJECT
