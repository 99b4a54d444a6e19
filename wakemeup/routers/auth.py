# wakemeup/routers/auth.py
from typing import Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from wakemeup.deps import TokenClaims, get_current_user
from wakemeup.services import user_service
from wakemeup.utils.database import get_db

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ---------------------- MODELS ----------------------
class CredentialsIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ---------------------- ROUTES ----------------------
@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: Optional[CredentialsIn] = None, db: AsyncSession = Depends(get_db)):
    payload = payload or CredentialsIn()
    await user_service.register(db, payload.email, payload.password)
    return {"ok": True}


@router.post("/login")
async def login(payload: Optional[CredentialsIn] = None, db: AsyncSession = Depends(get_db)):
    payload = payload or CredentialsIn()
    return await user_service.authenticate(db, payload.email, payload.password)


@router.get("/profile")
async def profile(current_user: TokenClaims = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await user_service.get_profile(db, current_user.user_id)


# Tokens are stateless; the client discards its copy.
@router.post("/logout")
async def logout(current_user: TokenClaims = Depends(get_current_user)):
    return {"ok": True}
