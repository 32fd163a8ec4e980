"""
FastAPI dependencies for authentication.

Provides the injected collaborators (``get_user_store``,
``get_token_issuer``, ``get_settings``) and the ``get_current_user_id``
gate used by protected routes.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header, Request

from auth.errors import Forbidden, Unauthorized
from auth.jwt import TokenIssuer, TokenStatus
from config.settings import Settings
from database.users import UserStore

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from ``Bearer <token>``, or None for any other shape."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX):].strip()
    return token or None


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> int:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id.

    No usable token → 401; a token that fails verification → 403.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthorized()

    result = get_token_issuer(request).verify(token)
    if result.status is not TokenStatus.VALID:
        logger.info("Rejected %s token on %s", result.status.value, request.url.path)
        raise Forbidden()

    try:
        return int(result.user_id)
    except ValueError:
        raise Forbidden()
