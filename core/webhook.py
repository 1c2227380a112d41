# =============================================================================
# core/webhook.py  —  Outbound call to the n8n image-generation webhook
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   POSTs one OutboundPayload to the configured webhook and returns the
#   parsed WebhookResult.  That is the whole job: one request, one await,
#   no retry, no streaming.
#
# FAILURES:
#   - Non-2xx status   →  WebhookError("N8N webhook failed: <status> <reason>")
#   - Over budget      →  TimeoutError (anyio.fail_after caps the whole call)
#   - Network problems →  httpx exceptions propagate unchanged
#                         (httpx.ConnectError, httpx.TimeoutException, ...)
#   - Malformed JSON   →  json.JSONDecodeError propagates unchanged
#   The handler in core/image_generation.py turns all of them into text.
#
# TESTING:
#   Pass an httpx transport (e.g. httpx.MockTransport) to swap the network
#   out; everything else about the request is built the same way.
# =============================================================================

import logging
from typing import Optional

import anyio
import httpx

from core.config import ServerConfig
from core.models import OutboundPayload, WebhookResult


logger = logging.getLogger(__name__)


class WebhookError(RuntimeError):
    """The webhook answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        super().__init__(f"N8N webhook failed: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class WebhookClient:
    def __init__(
        self,
        url: str,
        timeout_s: float,
        user_agent: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: ServerConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "WebhookClient":
        return cls(
            url=config.webhook_url,
            timeout_s=config.request_timeout_s,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def post(self, payload: OutboundPayload) -> WebhookResult:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

        # httpx applies its timeout per phase; fail_after caps the whole exchange
        with anyio.fail_after(self.timeout_s):
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.post(self.url, json=payload.to_dict(), headers=headers)

            if not response.is_success:
                error = WebhookError(response.status_code, response.reason_phrase, response.text)
                logger.error(str(error))
                logger.debug(f"Error response: {error.body}")
                raise error

            result = WebhookResult.from_json(response.json())

        logger.debug(
            f"N8N response received: success={result.success}, "
            f"has_image={bool(result.generated_image)}, timestamp={result.timestamp}"
        )
        return result
