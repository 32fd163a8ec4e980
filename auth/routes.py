"""
Auth API routes — signup, login, profile.

Route prefix: /api
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from auth.dependencies import (
    get_current_user_id,
    get_settings,
    get_token_issuer,
    get_user_store,
)
from auth.errors import DuplicateAccount, InternalError, InvalidCredentials, NotFound
from auth.jwt import TokenIssuer
from auth.password import hash_password_async, verify_password_async
from config.settings import Settings
from database.users import ConstraintViolation, StoreError, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime


class AuthResponse(BaseModel):
    user: UserOut
    token: str


class ProfileResponse(BaseModel):
    user: UserOut


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    store: UserStore = Depends(get_user_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Register a new user and sign them in."""
    try:
        if await store.find_by_email(req.email) is not None:
            raise DuplicateAccount()

        password_hash = await hash_password_async(req.password, settings.bcrypt_rounds)
        user = await store.insert(req.name, req.email, password_hash)
    except ConstraintViolation:
        # A concurrent signup won the race past the lookup above.
        raise DuplicateAccount()
    except StoreError:
        logger.exception("Signup failed for %s", req.email)
        raise InternalError()

    token = issuer.issue(user.id)
    logger.info("Registered user %s (%s)", user.name, user.id)

    return {"user": user.public_dict(), "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    store: UserStore = Depends(get_user_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        user = await store.find_by_email(req.email)
    except StoreError:
        logger.exception("Login lookup failed for %s", req.email)
        raise InternalError()

    if user is None or not await verify_password_async(req.password, user.password_hash):
        logger.info("Failed login for %s", req.email)
        raise InvalidCredentials()

    token = issuer.issue(user.id)
    logger.info("Login: %s (%s)", user.name, user.id)

    return {"user": user.public_dict(), "token": token}


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    user_id: int = Depends(get_current_user_id),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Return the authenticated user's account."""
    try:
        user = await store.find_by_id(user_id)
    except StoreError:
        logger.exception("Profile lookup failed for user %s", user_id)
        raise InternalError()

    if user is None:
        raise NotFound()

    return {"user": user.public_dict()}
