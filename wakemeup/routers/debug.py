# wakemeup/routers/debug.py
# Development diagnostics, mounted only when ENABLE_DEBUG_ROUTES is on.
import logging
from fastapi import APIRouter, Depends
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wakemeup.errors import Internal
from wakemeup.services import user_service
from wakemeup.utils.database import database_url, get_db, get_engine

router = APIRouter(prefix="/api/debug", tags=["debug"])
logger = logging.getLogger("wakemeup.debug")


@router.get("/tables")
async def list_tables():
    """Table names in the application database, to verify the schema."""
    try:
        engine = await get_engine()
        async with engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    except SQLAlchemyError as e:
        logger.error(f"Listing tables failed: {e}")
        raise Internal(str(e))


@router.get("/users")
async def list_users(db: AsyncSession = Depends(get_db)):
    return await user_service.list_recent_users(db, limit=50)


@router.get("/config")
def show_config():
    # credentials are never echoed
    url = database_url()
    return {"host": url.host, "port": url.port, "database": url.database}
