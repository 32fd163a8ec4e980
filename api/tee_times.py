"""
Tee-time listing route.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from auth.errors import InternalError
from database.tee_times import TeeTimeRecord, TeeTimeStore
from database.users import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tee-times"])


def get_tee_time_store(request: Request) -> TeeTimeStore:
    return request.app.state.tee_time_store


def format_clock(moment: datetime) -> str:
    """``datetime`` → ``"7:05 AM"``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def _price(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def serialize_tee_time(record: TeeTimeRecord) -> Dict[str, Any]:
    return {
        "id": str(record.id),
        "teeTime": record.tee_time.isoformat(),
        "time": format_clock(record.tee_time),
        "spotsLeft": record.spots_left,
        "holes": record.hole_count,
        "priceWalk": _price(record.price_walk),
        "priceWithCart": _price(record.price_with_cart),
        "courseName": record.course_name,
        "state": record.course_state,
    }


@router.get("/tee-times")
async def list_tee_times(
    day: Optional[date] = Query(None, alias="date"),
    store: TeeTimeStore = Depends(get_tee_time_store),
) -> List[Dict[str, Any]]:
    """List tee times, optionally for a single ``YYYY-MM-DD`` date."""
    try:
        records = await store.list_tee_times(day)
    except StoreError:
        logger.exception("Error fetching tee times (date=%s)", day)
        raise InternalError()

    return [serialize_tee_time(r) for r in records]
