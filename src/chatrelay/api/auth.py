"""Admin authorization: static header token and signed session cookie.

Provides:
- StaticTokenGuard: shared secret in the x-rt-admin-token header (scripts, curl)
- SessionGuard: HS256 JWT in the rt_session cookie (browser admin panel)
- require_admin(): FastAPI dependency factory declaring which guards a route accepts
- issue_session_token() / verify_session_token(): stateless 7-day sessions

Both guards fail closed: an unconfigured secret rejects every caller.
Failures carry a reason for logs only; callers always get the same 401.
"""

from __future__ import annotations

import hmac
import time
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import jwt
from fastapi import Depends, Request, Response

from chatrelay.api.errors import AuthorizationError
from chatrelay.api.state import RelayState, get_state
from chatrelay.infra.settings import (
    ADMIN_TOKEN_HEADER,
    SESSION_COOKIE_NAME,
    SESSION_TTL_SECONDS,
)

SESSION_ALGORITHM = "HS256"
ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class AdminIdentity:
    """Who passed the guard, and how."""

    subject: str
    method: str


class AdminGuard(Protocol):
    def authorize(self, request: Request, state: RelayState) -> AdminIdentity:
        """Return the caller's identity or raise AuthorizationError."""
        ...


def secrets_match(expected: str, supplied: Any) -> bool:
    """Exact, constant-time comparison. An empty expected value never matches."""
    if not expected or not isinstance(supplied, str):
        return False
    return hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))


def issue_session_token(secret: str, now: int | None = None) -> str:
    """Sign a new admin session token valid for SESSION_TTL_SECONDS."""
    issued_at = int(now if now is not None else time.time())
    claims = {
        "sub": ADMIN_ROLE,
        "role": ADMIN_ROLE,
        "iat": issued_at,
        "exp": issued_at + SESSION_TTL_SECONDS,
    }
    return jwt.encode(claims, secret, algorithm=SESSION_ALGORITHM)


def verify_session_token(token: str, secret: str) -> dict[str, Any]:
    """Verify signature, expiry and role of a session token.

    Raises:
        AuthorizationError: For any failure; the reason is kept for logs.
    """
    if not secret:
        raise AuthorizationError("session_secret_not_configured")
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthorizationError("session_expired")
    except jwt.InvalidSignatureError:
        raise AuthorizationError("session_bad_signature")
    except jwt.InvalidTokenError:
        raise AuthorizationError("session_malformed")

    if claims.get("role") != ADMIN_ROLE:
        raise AuthorizationError("session_wrong_role")
    return claims


class StaticTokenGuard:
    """Accepts callers presenting RT_ADMIN_TOKEN in the admin header."""

    def authorize(self, request: Request, state: RelayState) -> AdminIdentity:
        expected = state.settings.admin_token
        if not expected:
            raise AuthorizationError("admin_token_not_configured")
        if not secrets_match(expected, request.headers.get(ADMIN_TOKEN_HEADER)):
            raise AuthorizationError("admin_token_mismatch")
        return AdminIdentity(subject=ADMIN_ROLE, method="static_token")


class SessionGuard:
    """Accepts callers holding a valid session cookie."""

    def authorize(self, request: Request, state: RelayState) -> AdminIdentity:
        token = request.cookies.get(SESSION_COOKIE_NAME)
        if not token:
            raise AuthorizationError("session_missing")
        claims = verify_session_token(token, state.settings.session_secret)
        return AdminIdentity(subject=str(claims["sub"]), method="session")


STATIC_TOKEN = StaticTokenGuard()
SESSION = SessionGuard()


def require_admin(*guards: AdminGuard) -> Callable[..., AdminIdentity]:
    """Create a dependency that admits callers accepted by any of guards.

    Usage:
        @router.get("/something")
        def endpoint(admin: AdminIdentity = Depends(require_admin(SESSION))):
            ...
    """
    if not guards:
        raise ValueError("require_admin needs at least one guard")

    def dependency(request: Request, state: RelayState = Depends(get_state)) -> AdminIdentity:
        failure = AuthorizationError()
        for guard in guards:
            try:
                return guard.authorize(request, state)
            except AuthorizationError as e:
                failure = e
        raise failure

    return dependency


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=SESSION_TTL_SECONDS,
        path="/",
        httponly=True,
        secure=True,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=True,
        samesite="strict",
    )


# Dependency aliases for cleaner route signatures
AdminSessionDep = Depends(require_admin(SESSION))
AdminTokenDep = Depends(require_admin(STATIC_TOKEN))
