# dealflow/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from ..config import Settings
from ..db import build_engine, build_session_maker, create_tables
from ..domain.lead_scoring import LeadScorer
from ..domain.scorers import ConstantMarketTiming, MarketTimingSource
from ..integrations.base import EventSink
from ..integrations.webhook import build_sink
from .api.routers import agents, deal_analyzer, health, scoring


def create_app(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    market_timing: MarketTimingSource | None = None,
    sink: EventSink | None = None,
) -> FastAPI:
    """
    Build the API around one explicit Settings object. Nothing here is a
    module-level global, so tests can hand in their own config/engine/sink.
    """
    settings = settings or Settings()
    engine = engine or build_engine(settings)

    app = FastAPI(title="DealFlow - Wholesale Scoring API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)
    app.state.lead_scorer = LeadScorer(market_timing or ConstantMarketTiming(settings.MARKET_TIMING_SCORE))
    app.state.sink = sink or build_sink(settings)

    @app.on_event("startup")
    async def _startup() -> None:
        # Single place where DB tables are created in dev.
        await create_tables(engine)

    # Routers
    app.include_router(health.router)
    app.include_router(scoring.router)
    app.include_router(agents.router)
    app.include_router(deal_analyzer.router)

    return app
