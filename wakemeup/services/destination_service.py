# wakemeup/services/destination_service.py
import logging
import math
import re
from datetime import datetime
from numbers import Real
from typing import Any, Optional, Union
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wakemeup.errors import Internal, InvalidInput
from wakemeup.models.destination import Destination

logger = logging.getLogger("wakemeup.destinations")


# Stands in for a field the client did not send at all
MISSING = object()

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_RADIX = re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))")
_RADIX_BASES = {"hex": 16, "oct": 8, "bin": 2}


def parse_number(value: Any) -> Optional[float]:
    """
    Numeric coercion with the same rules as a JavaScript client's Number():
    null, booleans and blank strings are numbers, a missing field is not.
    Returns None unless the result is finite.
    """
    if value is MISSING:
        return None
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Real):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        radix = _RADIX.fullmatch(text)
        try:
            if radix:
                base = radix.lastgroup
                number = float(int(radix.group(base), _RADIX_BASES[base]))
            elif _DECIMAL.fullmatch(text):
                number = float(text)
            else:
                return None
        except OverflowError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _received(value: Any) -> Any:
    # NaN and Infinity are not valid JSON
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def parse_destination_id(raw: Any) -> Union[int, float]:
    """Any finite non-zero number. Fractional ids are accepted and simply match no row."""
    number = parse_number(raw)
    if not number:
        raise InvalidInput("Invalid id")
    return int(number) if number.is_integer() else number


async def list_destinations(db: AsyncSession) -> list:
    """All destinations, most recently created first."""
    try:
        result = await db.execute(
            select(Destination).order_by(Destination.created_at.desc(), Destination.id.desc())
        )
    except SQLAlchemyError as e:
        logger.error(f"Listing destinations failed: {e}")
        raise Internal(str(e))
    return [d.to_dict() for d in result.scalars()]


async def create_destination(
    db: AsyncSession, name: Any = MISSING, latitude: Any = MISSING, longitude: Any = MISSING
) -> dict:
    lat = parse_number(latitude)
    lng = parse_number(longitude)
    name_valid = isinstance(name, str) and len(name.strip()) > 0
    if not name_valid or lat is None or lng is None:
        details = {
            "nameValid": name_valid,
            "latitudeValid": lat is not None,
            "longitudeValid": lng is not None,
        }
        # fields the client never sent are left out
        if latitude is not MISSING:
            details["latitudeReceived"] = _received(latitude)
        if longitude is not MISSING:
            details["longitudeReceived"] = _received(longitude)
        raise InvalidInput("Invalid payload", details=details)

    destination = Destination(name=name.strip(), latitude=lat, longitude=lng, created_at=datetime.now())
    db.add(destination)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Destination insert failed: {e}")
        raise Internal(str(e))
    logger.info(f"Destination inserted id={destination.id} name={destination.name}")
    return {"id": destination.id}


async def delete_destination(db: AsyncSession, destination_id: Union[int, float]):
    """Deletes by id. An id with no row is not an error."""
    try:
        result = await db.execute(delete(Destination).where(Destination.id == destination_id))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Destination delete failed for id={destination_id}: {e}")
        raise Internal(str(e))
    logger.info(f"Destination delete id={destination_id} rows={result.rowcount}")
