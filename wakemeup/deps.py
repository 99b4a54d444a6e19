# wakemeup/deps.py
from typing import NamedTuple, Optional
from fastapi import Header

from wakemeup.errors import Unauthorized
from wakemeup.services.auth_service import decode_access_token


class TokenClaims(NamedTuple):
    user_id: int
    email: str


async def get_current_user(authorization: Optional[str] = Header(None)) -> TokenClaims:
    """
    Expect Authorization: Bearer <token>
    Returns the verified claims or raises 401. Does not touch the database.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthorized("Missing token")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise Unauthorized("Missing token")
    payload = decode_access_token(token)
    if not payload or "userId" not in payload:
        raise Unauthorized("Invalid token")
    return TokenClaims(user_id=payload["userId"], email=payload.get("email"))
