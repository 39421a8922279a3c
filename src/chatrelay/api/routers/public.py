"""Unauthenticated operational routes."""

import os

from fastapi import APIRouter

from chatrelay.infra.time import utc_iso

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/version")
def version() -> dict:
    """Deployed commit, to confirm a rollout actually landed."""
    return {
        "ok": True,
        "commit": os.environ.get("RENDER_GIT_COMMIT") or os.environ.get("COMMIT_SHA") or None,
        "renderedAt": utc_iso(),
    }
