"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response

from chatrelay.api.errors import register_error_handlers
from chatrelay.api.state import RelayState
from chatrelay.infra.settings import Settings
from chatrelay.observability.correlation import (
    CORRELATION_ID_HEADER,
    reset_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

from .routers import public
from .routes import admin, auth, messages, webhooks_chatguru

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, state: RelayState | None = None) -> FastAPI:
    """Create the relay app with its single shared RelayState.

    Args:
        settings: Explicit settings. If None, read from the environment.
        state: Pre-built state (tests). Takes precedence over settings.

    Returns:
        Configured FastAPI application.
    """
    if state is None:
        state = RelayState.from_settings(settings or Settings.from_env())

    app = FastAPI(
        title="ChatGuru Relay",
        docs_url=None,
        redoc_url=None,
    )
    app.state.relay = state

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = resolve_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    register_error_handlers(app)

    app.include_router(public.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(webhooks_chatguru.router)
    app.include_router(messages.router)

    missing = state.settings.provider.missing()
    logger.info(
        "relay app created",
        extra={
            "extra_fields": safe_log_context(
                provider_configured=not missing,
                missing_provider_settings=",".join(missing),
                admin_token_configured=bool(state.settings.admin_token),
                session_secret_configured=bool(state.settings.session_secret),
            )
        },
    )
    return app
