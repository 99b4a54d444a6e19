# wakemeup/services/user_service.py
import logging
from datetime import datetime
from typing import Any
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wakemeup.errors import Conflict, Internal, InvalidInput, NotFound, Unauthorized
from wakemeup.models.user import User
from wakemeup.services.auth_service import create_access_token, hash_password, verify_password

logger = logging.getLogger("wakemeup.auth")

# Same text for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid credentials"


def _require_credentials(email: Any, password: Any):
    if not isinstance(email, str) or not email or not isinstance(password, str) or not password:
        raise InvalidInput("Email and password required")


async def register(db: AsyncSession, email: Any, password: Any) -> dict:
    """
    Create a user with a bcrypt hash of the password.
    Duplicate emails are detected by the unique index, not by a lookup first.
    """
    _require_credentials(email, password)
    # bcrypt is CPU bound, keep it off the event loop
    password_hash = await run_in_threadpool(hash_password, password)
    user = User(email=email, password_hash=password_hash, created_at=datetime.now())
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info(f"Signup rejected, email already in use: {email}")
        raise Conflict("Email already in use")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Signup failed for {email}: {e}")
        raise Internal(str(e))
    logger.info(f"Signup OK for {email}")
    return {"id": user.id}


async def authenticate(db: AsyncSession, email: Any, password: Any) -> dict:
    _require_credentials(email, password)
    try:
        result = await db.execute(select(User).filter_by(email=email))
    except SQLAlchemyError as e:
        logger.error(f"Login lookup failed for {email}: {e}")
        raise Internal(str(e))
    user = result.scalars().first()
    if not user or not await run_in_threadpool(verify_password, password, user.password_hash):
        logger.info(f"Login failed for {email}")
        raise Unauthorized(INVALID_CREDENTIALS)
    return {"token": create_access_token(user.id, user.email)}


async def get_profile(db: AsyncSession, user_id: int) -> dict:
    try:
        result = await db.execute(select(User).filter_by(id=user_id))
    except SQLAlchemyError as e:
        raise Internal(str(e))
    user = result.scalars().first()
    if not user:
        raise NotFound("User not found")
    return {"id": user.id, "email": user.email, "createdAt": user.created_at}


async def list_recent_users(db: AsyncSession, limit: int = 50) -> list:
    try:
        result = await db.execute(select(User).order_by(User.id.desc()).limit(limit))
    except SQLAlchemyError as e:
        raise Internal(str(e))
    return [{"id": u.id, "email": u.email, "created_at": u.created_at} for u in result.scalars()]
