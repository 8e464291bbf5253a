#!/usr/bin/env python3
# src/sse_stream_server/auth.py
"""
Request authentication strategies.

A validator is any callable that takes a request and says whether it may
proceed. The auth middleware does not care which one it is given.
"""

import hmac
from collections.abc import Callable

from starlette.requests import Request

from .constants import BEARER_PREFIX, HEADER_AUTHORIZATION

AuthValidator = Callable[[Request], bool]


def allow_all_validator() -> AuthValidator:
    """Accept every request."""

    def validate(request: Request) -> bool:
        return True

    return validate


def token_auth_validator(token: str) -> AuthValidator:
    """Accept only requests carrying ``Authorization: Bearer <token>``."""
    expected = f"{BEARER_PREFIX}{token}".encode()

    def validate(request: Request) -> bool:
        provided = request.headers.get(HEADER_AUTHORIZATION)
        if provided is None:
            return False
        # Header values arrive decoded as latin-1; re-encoding recovers the raw bytes.
        return hmac.compare_digest(provided.encode("latin-1"), expected)

    return validate


def validator_for_token(token: str | None) -> AuthValidator:
    """Token validator when a token is configured, allow-all otherwise."""
    if token:
        return token_auth_validator(token)
    return allow_all_validator()
