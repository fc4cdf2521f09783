from __future__ import annotations

import hashlib
import hmac
import json
import logging
from typing import Any

import httpx

from ..config import Settings
from .base import DeliveryResult, EventSink, NullSink

log = logging.getLogger(__name__)


class WebhookSink:
    """POSTs {"type": ..., "data": ...} to an automation webhook (Zapier etc.)."""

    def __init__(
        self,
        url: str,
        secret: str | None = None,
        timeout_s: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.secret = secret
        self.timeout_s = timeout_s
        self._transport = transport

    def _sign(self, body: bytes) -> str | None:
        if not self.secret:
            return None
        return hmac.new(self.secret.encode("utf-8"), body, hashlib.sha256).hexdigest()

    async def deliver(self, event_type: str, payload: dict[str, Any]) -> DeliveryResult:
        try:
            body = json.dumps({"type": event_type, "data": payload}, allow_nan=False).encode("utf-8")
        except ValueError as e:
            log.warning("webhook %s payload not encodable: %s", event_type, e)
            return DeliveryResult(ok=False, error=str(e))
        headers = {"Content-Type": "application/json"}
        sig = self._sign(body)
        if sig:
            headers["X-DealFlow-Signature"] = sig

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.post(self.url, content=body, headers=headers)
        except httpx.HTTPError as e:
            log.warning("webhook %s delivery failed: %s", event_type, e)
            return DeliveryResult(ok=False, error=str(e))

        if 200 <= r.status_code < 300:
            return DeliveryResult(ok=True)
        log.warning("webhook %s rejected: HTTP %s", event_type, r.status_code)
        return DeliveryResult(ok=False, error=f"HTTP {r.status_code}: {r.text[:500]}")


def build_sink(settings: Settings) -> EventSink:
    url = settings.WEBHOOK_URL or settings.ZAPIER_WEBHOOK_URL
    if not url:
        return NullSink()
    return WebhookSink(url, secret=settings.WEBHOOK_SECRET, timeout_s=settings.WEBHOOK_TIMEOUT_S)
