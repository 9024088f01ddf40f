"""Request Dependencies — UserAPI lookup and per-request context resolution.

Invariants:
    - UserAPI comes from app.state (built once in the lifespan), never a module global
    - A missing or undecodable Authorization header yields the anonymous context
    - A decodable header resolves through UserAPI.find_or_create_user, so the
      context user always has both id and email, or there is no user at all

Design Decisions:
    - Token is the base64-encoded email: this layer resolves identity, it does
      not issue or verify sessions
"""

import base64
import binascii
import logging

from fastapi import Depends, Request

from launchpad.core.context import RequestContext
from launchpad.services.user_api import UserAPI

logger = logging.getLogger(__name__)


def encode_token(email: str) -> str:
    return base64.b64encode(email.encode("utf-8")).decode("ascii")


def decode_token(token: str) -> str | None:
    try:
        return base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None


def get_user_api(request: Request) -> UserAPI:
    return request.app.state.user_api


async def get_request_context(
    request: Request, user_api: UserAPI = Depends(get_user_api),
) -> RequestContext:
    """Resolve the Authorization header into a RequestContext."""
    header = request.headers.get("authorization", "")
    token = header.removeprefix("Bearer ").strip()
    if not token:
        return RequestContext.anonymous()

    email = decode_token(token)
    if email is None:
        logger.info("Ignoring undecodable authorization token")
        return RequestContext.anonymous()

    user = await user_api.find_or_create_user(RequestContext.anonymous(), email)
    if user is None:
        return RequestContext.anonymous()
    return RequestContext.for_user(id=user.id, email=user.email)
