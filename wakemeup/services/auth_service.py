# wakemeup/services/auth_service.py
import bcrypt
import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from wakemeup import config

logger = logging.getLogger("wakemeup.auth")

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


# ---------------- PASSWORD HASHING ----------------

def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed.")
        return False


# ---------------- JWT TOKENS ----------------

def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Generate a signed JWT carrying the user's id and email."""
    issued = datetime.now(timezone.utc)
    expire = issued + (expires_delta if expires_delta is not None else timedelta(days=config.JWT_EXPIRE_DAYS))
    payload = {"userId": user_id, "email": email, "iat": issued, "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the token claims, or None if the signature, expiry or required-claims check fails."""
    try:
        return jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp", "userId"]},
        )
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        return None
