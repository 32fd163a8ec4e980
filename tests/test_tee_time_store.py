"""
Tests for the SQLAlchemy tee-time store — statement shape, row mapping and
error mapping.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from database.tee_times import TeeTimeRecord, TeeTimeStore
from database.users import StoreError

START = datetime(2025, 6, 1, 7, 30, tzinfo=timezone.utc)


def _store_with_rows(rows=()):
    """Return (store, session) where ``session.execute`` yields ``rows``."""
    session = AsyncMock()
    result = MagicMock()
    result.all.return_value = list(rows)
    session.execute.return_value = result
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    return TeeTimeStore(factory), session


def _row(**overrides):
    values = dict(
        id=3,
        tee_time=START,
        hole_count=9,
        spots_left=2,
        price_walk=Decimal("20.00"),
        price_with_cart=Decimal("35.00"),
        course_name="Cedar Ridge",
        course_state="OK",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _sql(session) -> str:
    stmt = session.execute.call_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestStatement:
    @pytest.mark.asyncio
    async def test_joins_courses_and_orders_by_start(self):
        store, session = _store_with_rows()
        await store.list_tee_times()

        sql = _sql(session)
        assert "JOIN courses ON tee_times.course_id = courses.id" in sql
        assert "courses.course_state" in sql
        assert sql.rstrip().endswith("ORDER BY tee_times.tee_time ASC")

    @pytest.mark.asyncio
    async def test_no_date_filter_without_day(self):
        store, session = _store_with_rows()
        await store.list_tee_times()

        sql = _sql(session)
        assert "WHERE" not in sql
        assert "date(" not in sql

    @pytest.mark.asyncio
    async def test_date_filter_with_day(self):
        store, session = _store_with_rows()
        await store.list_tee_times(date(2025, 6, 1))

        stmt = session.execute.call_args.args[0]
        compiled = stmt.compile(dialect=postgresql.dialect())
        assert "WHERE date(tee_times.tee_time) = " in str(compiled)
        assert date(2025, 6, 1) in compiled.params.values()


class TestRowMapping:
    @pytest.mark.asyncio
    async def test_rows_become_records_in_order(self):
        later = START.replace(hour=9)
        store, _ = _store_with_rows([_row(), _row(id=4, tee_time=later, course_state=None)])

        records = await store.list_tee_times()

        assert records == [
            TeeTimeRecord(3, START, 9, 2, Decimal("20.00"), Decimal("35.00"), "Cedar Ridge", "OK"),
            TeeTimeRecord(4, later, 9, 2, Decimal("20.00"), Decimal("35.00"), "Cedar Ridge", None),
        ]

    @pytest.mark.asyncio
    async def test_empty_result(self):
        store, _ = _store_with_rows()
        assert await store.list_tee_times(date(2030, 1, 1)) == []


class TestErrors:
    @pytest.mark.asyncio
    async def test_driver_failure_raises_store_error(self):
        store, session = _store_with_rows()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(StoreError):
            await store.list_tee_times()
