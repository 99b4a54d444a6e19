# wakemeup/routers/destinations.py
from typing import Any, Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from wakemeup.deps import get_current_user
from wakemeup.services import destination_service
from wakemeup.utils.database import get_db

# Every route here sits behind the bearer token check
router = APIRouter(
    prefix="/api/destinations",
    tags=["destinations"],
    dependencies=[Depends(get_current_user)],
)


class DestinationIn(BaseModel):
    # Coordinates may arrive as numbers, numeric strings, booleans or null
    name: Any = None
    latitude: Any = None
    longitude: Any = None


@router.get("")
async def list_destinations(db: AsyncSession = Depends(get_db)):
    return await destination_service.list_destinations(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_destination(payload: Optional[DestinationIn] = None, db: AsyncSession = Depends(get_db)):
    payload = payload or DestinationIn()
    # null and absent are different inputs for the coordinate coercion
    fields = {name: getattr(payload, name) for name in payload.model_fields_set}
    return await destination_service.create_destination(db, **fields)


@router.delete("/{destination_id}")
async def delete_destination(destination_id: str, db: AsyncSession = Depends(get_db)):
    await destination_service.delete_destination(db, destination_service.parse_destination_id(destination_id))
    return {"ok": True}
