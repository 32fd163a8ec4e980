"""
Shared fixtures: an in-memory credential store and a wired-up test app.
"""

import asyncio
import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from database.tee_times import TeeTimeRecord
from database.users import ConstraintViolation, UserRecord
from main import create_app

TEST_SECRET = "test-secret"


class InMemoryUserStore:
    """Dict-backed ``UserStore`` double.

    ``insert`` enforces email uniqueness the way the database's unique index
    does, independent of any lookup the caller made first.
    """

    def __init__(self) -> None:
        self._by_id: Dict[int, UserRecord] = {}
        self._ids = itertools.count(1)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        await asyncio.sleep(0)
        for user in self._by_id.values():
            if user.email == email:
                return user
        return None

    async def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        await asyncio.sleep(0)
        return self._by_id.get(user_id)

    async def insert(self, name: str, email: str, password_hash: str) -> UserRecord:
        await asyncio.sleep(0)
        if any(u.email == email for u in self._by_id.values()):
            raise ConstraintViolation("email already registered")
        user = UserRecord(
            id=next(self._ids),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self._by_id[user.id] = user
        return user

    def delete(self, user_id: int) -> None:
        self._by_id.pop(user_id, None)


class InMemoryTeeTimeStore:
    def __init__(self, records: Optional[List[TeeTimeRecord]] = None) -> None:
        self.records = records or []
        self.requested_days = []

    async def list_tee_times(self, day=None) -> List[TeeTimeRecord]:
        self.requested_days.append(day)
        if day is None:
            return list(self.records)
        return [r for r in self.records if r.tee_time.date() == day]


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def tee_time_store() -> InMemoryTeeTimeStore:
    return InMemoryTeeTimeStore()


@pytest.fixture
def app(settings, user_store, tee_time_store):
    return create_app(settings, user_store=user_store, tee_time_store=tee_time_store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
