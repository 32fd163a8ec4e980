"""
Read-only tee-time schedule, joined against the owning course.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.models import Course, TeeTime
from database.users import StoreError


@dataclass(frozen=True)
class TeeTimeRecord:
    id: int
    tee_time: datetime
    hole_count: int
    spots_left: int
    price_walk: Optional[Decimal]
    price_with_cart: Optional[Decimal]
    course_name: str
    course_state: Optional[str]


class TeeTimeStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_tee_times(self, day: Optional[date] = None) -> List[TeeTimeRecord]:
        """All tee times ordered by start, optionally restricted to one calendar day."""
        stmt = (
            select(
                TeeTime.id,
                TeeTime.tee_time,
                TeeTime.hole_count,
                TeeTime.spots_left,
                TeeTime.price_walk,
                TeeTime.price_with_cart,
                Course.course_name,
                Course.course_state,
            )
            .join(Course, TeeTime.course_id == Course.id)
            .order_by(TeeTime.tee_time.asc())
        )
        if day is not None:
            stmt = stmt.where(func.date(TeeTime.tee_time) == day)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as exc:
            raise StoreError("tee time query failed") from exc

        return [
            TeeTimeRecord(
                id=row.id,
                tee_time=row.tee_time,
                hole_count=row.hole_count,
                spots_left=row.spots_left,
                price_walk=row.price_walk,
                price_with_cart=row.price_with_cart,
                course_name=row.course_name,
                course_state=row.course_state,
            )
            for row in rows
        ]
