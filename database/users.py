"""
Credential store — persistence of user accounts.

Every operation opens its own session from the injected
``async_sessionmaker``; callers only ever see frozen ``UserRecord`` copies.
The unique index on ``users.email`` is the authority on duplicate accounts:
``insert`` turns the resulting ``IntegrityError`` into ``ConstraintViolation``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.models import User

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The data store could not complete an operation."""


class ConstraintViolation(StoreError):
    """An insert was rejected by a uniqueness rule."""


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime

    def public_dict(self) -> Dict[str, Any]:
        """The user as exposed to clients — never includes the hash."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at,
        }


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class UserStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(User).where(User.email == email)
                )
                row = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError("user lookup by email failed") from exc
        return _to_record(row) if row is not None else None

    async def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        try:
            async with self._session_factory() as session:
                row = await session.get(User, user_id)
        except SQLAlchemyError as exc:
            raise StoreError("user lookup by id failed") from exc
        return _to_record(row) if row is not None else None

    async def insert(self, name: str, email: str, password_hash: str) -> UserRecord:
        try:
            async with self._session_factory() as session:
                row = User(name=name, email=email, password_hash=password_hash)
                session.add(row)
                await session.commit()
                await session.refresh(row)
                record = _to_record(row)
        except IntegrityError as exc:
            logger.info("Insert rejected by unique constraint for %s", email)
            raise ConstraintViolation("email already registered") from exc
        except SQLAlchemyError as exc:
            raise StoreError("user insert failed") from exc
        return record
