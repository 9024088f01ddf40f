"""User Routes — login (find-or-create by email) and current-user lookup.

Invariants:
    - Login answers 400 for a missing/invalid email and 503 when the store failed;
      the tagged Outcome from the core is what tells the two apart
    - GET /me answers 401 for the anonymous context
"""

import logging

from fastapi import APIRouter, Depends

from launchpad.api.dependencies import (
    encode_token, get_request_context, get_user_api,
)
from launchpad.core.context import RequestContext
from launchpad.core.domain_types import OutcomeKind
from launchpad.core.errors import AuthenticationRequiredError, EmailValidationError
from launchpad.schemas.user import LoginRequest, UserResponse
from launchpad.services.user_api import UserAPI

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["users"])


@router.post("/login", response_model=UserResponse)
async def login(body: LoginRequest, user_api: UserAPI = Depends(get_user_api)):
    """Find or create the user for an email and hand back its token."""
    outcome = await user_api.resolve_user(RequestContext.anonymous(), body.email)
    if outcome.kind is OutcomeKind.STORE_ERROR:
        raise outcome.error
    if not outcome.is_found:
        raise EmailValidationError(body.email)
    user = outcome.value
    return UserResponse(id=user.id, email=user.email, token=encode_token(user.email))


@router.get("/me", response_model=UserResponse)
async def me(ctx: RequestContext = Depends(get_request_context)):
    if ctx.user is None:
        raise AuthenticationRequiredError("me")
    return UserResponse(id=ctx.user_id, email=ctx.user_email, token=encode_token(ctx.user_email))
