"""Canonicalisation endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from playbook_verifier.pipeline import run_pipeline
from playbook_verifier.settings import Settings, load_settings

router = APIRouter()

__all__ = ["router"]

logger = logging.getLogger(__name__)


def _settings(request: Request) -> Settings:
    # Lifespan does not run under ASGITransport; fall back to the environment.
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        request.app.state.settings = settings
    return settings


@router.post(
    "/canonicalize",
    summary="Return the canonical, signable form of a playbook",
    operation_id="canonicalize_playbook",
    response_class=Response,
)
async def canonicalize(request: Request) -> Response:
    """Raw YAML in, canonical bytes out.

    Domain errors propagate to the handlers registered in ``create_app``.
    """
    raw = await request.body()
    result = run_pipeline(raw, _settings(request).excludable_keys)
    logger.info("Canonicalised playbook (%d bytes)", len(result.canonical))
    return Response(
        content=result.canonical,
        media_type="text/plain; charset=utf-8",
        headers={"x-exclusions": ",".join("/" + "/".join(p) for p in result.exclusions)},
    )
