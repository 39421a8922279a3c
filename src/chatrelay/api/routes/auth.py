"""Admin panel login/logout."""

from fastapi import APIRouter, Depends, Request, Response

from chatrelay.api.auth import (
    clear_session_cookie,
    issue_session_token,
    secrets_match,
    set_session_cookie,
)
from chatrelay.api.errors import AuthorizationError, ConfigurationError
from chatrelay.api.payloads import read_body_object
from chatrelay.api.state import RelayState, get_state
from chatrelay.observability.correlation import get_correlation_id
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

router = APIRouter(prefix="/api", tags=["auth"])

logger = get_logger(__name__)


@router.post("/login")
async def login(
    request: Request,
    response: Response,
    state: RelayState = Depends(get_state),
) -> dict:
    """Exchange admin credentials for a session cookie.

    Both fields are always compared so a wrong username and a wrong
    password are indistinguishable to the caller.
    """
    body = await read_body_object(request)
    settings = state.settings

    user_ok = secrets_match(settings.admin_user, body.get("user"))
    pass_ok = secrets_match(settings.admin_pass, body.get("pass"))
    if not (user_ok and pass_ok):
        raise AuthorizationError("bad_credentials")

    if not settings.session_secret:
        raise ConfigurationError(["SESSION_SECRET"], error="Session signing not configured")

    set_session_cookie(response, issue_session_token(settings.session_secret))
    logger.info(
        "admin logged in",
        extra={"extra_fields": safe_log_context(correlationId=get_correlation_id())},
    )
    return {"ok": True}


@router.post("/logout")
def logout(response: Response) -> dict:
    """Clear the session cookie. Safe to call without a session."""
    clear_session_cookie(response)
    return {"ok": True}
