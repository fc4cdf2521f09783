# dealflow/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from ..deps import get_settings, require_api_key
from ....config import Settings, validate_environment

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    def _redact(v: str | None) -> str | None:
        if not v:
            return v
        if len(v) <= 8:
            return "***"
        return v[:4] + "***" + v[-4:]

    problems = validate_environment(settings)
    return {
        "ENV": settings.ENV,
        "DEALFLOW_DB_URL": settings.DEALFLOW_DB_URL,
        "MARKET_TIMING_SCORE": settings.MARKET_TIMING_SCORE,
        "WEBHOOK_URL": settings.WEBHOOK_URL,
        "SUPABASE_URL": settings.SUPABASE_URL,
        "STRIPE_SECRET_KEY": _redact(settings.STRIPE_SECRET_KEY),
        "TELNYX_API_KEY": _redact(settings.TELNYX_API_KEY),
        "WEBHOOK_SECRET_SET": bool(settings.WEBHOOK_SECRET),
        "environment_valid": not problems,
        "environment_errors": problems,
    }


@router.get("/debug/routes", dependencies=[Depends(require_api_key)])
def debug_routes(request: Request) -> dict[str, Any]:
    """Shows what this running server has actually mounted."""
    routes: list[str] = []
    for r in request.app.routes:
        methods = getattr(r, "methods", None)
        path = getattr(r, "path", None)
        if path:
            if methods:
                routes.append(f"{sorted(list(methods))} {path}")
            else:
                routes.append(path)
    return {"count": len(routes), "routes": sorted(routes)}
