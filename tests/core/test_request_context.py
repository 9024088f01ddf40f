"""Request Context — verifies immutable identity helpers.

Tests:
    - anonymous context has no user, id or email
    - for_user builds a ContextUser with whatever was resolved
    - contexts are frozen
"""

import dataclasses

import pytest

from launchpad.core.context import ContextUser, RequestContext


def test_anonymous_context_has_no_identity():
    ctx = RequestContext.anonymous()
    assert ctx.user is None
    assert ctx.user_id is None
    assert ctx.user_email is None


def test_for_user_exposes_id_and_email():
    ctx = RequestContext.for_user(id=1, email="a@a.a")
    assert ctx.user == ContextUser(id=1, email="a@a.a")
    assert ctx.user_id == 1
    assert ctx.user_email == "a@a.a"


def test_partially_resolved_user():
    ctx = RequestContext.for_user(email="a@a.a")
    assert ctx.user is not None
    assert ctx.user_id is None
    assert ctx.user_email == "a@a.a"


def test_context_is_frozen():
    ctx = RequestContext.for_user(id=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.user = None
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.user.id = 2
