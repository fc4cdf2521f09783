from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Any


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    error: str | None = None


class EventSink(Protocol):
    async def deliver(self, event_type: str, payload: dict[str, Any]) -> DeliveryResult:
        ...


class NullSink:
    """Used when no webhook is configured: drops everything, reports not delivered."""

    async def deliver(self, event_type: str, payload: dict[str, Any]) -> DeliveryResult:
        return DeliveryResult(ok=False, error="no sink configured")
