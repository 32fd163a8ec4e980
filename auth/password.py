"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  bcrypt only reads the first 72 bytes
of a password; longer input is truncated the same way for hashing and
verification.
"""

from __future__ import annotations

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode()[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 10 by default)."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """``hash_password`` on a worker thread; bcrypt holds the CPU."""
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
