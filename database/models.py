"""
SQLAlchemy ORM models for users, courses and tee times.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_name = Column(String(255), nullable=False)
    course_state = Column(String(64))

    tee_times = relationship("TeeTime", back_populates="course", cascade="all, delete-orphan")


class TeeTime(Base):
    __tablename__ = "tee_times"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    tee_time = Column(DateTime(timezone=True), nullable=False, index=True)
    hole_count = Column(Integer, nullable=False, default=18)
    spots_left = Column(Integer, nullable=False, default=4)
    price_walk = Column(Numeric(8, 2))
    price_with_cart = Column(Numeric(8, 2))

    course = relationship("Course", back_populates="tee_times")
