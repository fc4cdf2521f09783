# dealflow/entrypoints/api/deps.py
from __future__ import annotations

from fastapi import Header, HTTPException, Request

from ...config import Settings
from ...domain.lead_scoring import LeadScorer
from ...integrations.base import EventSink


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_lead_scorer(request: Request) -> LeadScorer:
    return request.app.state.lead_scorer


def get_sink(request: Request) -> EventSink:
    return request.app.state.sink


def require_api_key(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> None:
    settings = get_settings(request)
    if settings.API_KEY:
        if not x_api_key or x_api_key != settings.API_KEY:
            raise HTTPException(status_code=401, detail="Invalid API key")
