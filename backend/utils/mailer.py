# backend/utils/mailer.py
import logging
import random
from dataclasses import dataclass
from typing import Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


@dataclass
class DeliveryResult:
    success: bool
    error: Optional[str] = None


class LoggingMailer:
    """Writes each message to the log instead of sending it.

    ``failure_rate`` makes a share of deliveries fail, for exercising the
    partial-delivery path locally.
    """

    def __init__(self, failure_rate: float = 0.0):
        self.failure_rate = failure_rate

    async def send(self, to: str, subject: str, body: str) -> DeliveryResult:
        logger.info("[EMAIL] to=%s subject=%s body=%s", to, subject, body[:100])
        if self.failure_rate and random.random() < self.failure_rate:
            return DeliveryResult(success=False, error="SMTP connection failed")
        return DeliveryResult(success=True)


class HttpMailer:
    """Posts each message as JSON to a transactional mail API.

    Use as an async context manager; every message sent inside one block
    goes through the same ``httpx.AsyncClient``.
    """

    def __init__(self, api_url: str, api_key: Optional[str] = None, sender: str = settings.MAIL_FROM,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        self._client = httpx.AsyncClient(timeout=10.0, headers=headers, transport=self.transport)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self._client.aclose()
        self._client = None

    async def send(self, to: str, subject: str, body: str) -> DeliveryResult:
        if self._client is None:
            raise RuntimeError("HttpMailer.send called outside 'async with'")
        payload = {"from": self.sender, "to": to, "subject": subject, "text": body}
        try:
            response = await self._client.post(self.api_url, json=payload)
            response.raise_for_status()
            return DeliveryResult(success=True)
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error(f"Mail API error for {to}: {e}")
            return DeliveryResult(success=False, error=str(e))


# One mailer per request; the HTTP client lives for the whole dispatch
async def get_mailer():
    if settings.MAIL_API_URL:
        async with HttpMailer(settings.MAIL_API_URL, settings.MAIL_API_KEY, settings.MAIL_FROM) as mailer:
            yield mailer
    else:
        yield LoggingMailer(settings.MAIL_FAILURE_RATE)


def personalize(text: str, user) -> str:
    return (
        text.replace("{firstName}", user.first_name or "")
        .replace("{lastName}", user.last_name or "")
        .replace("{email}", user.email or "")
        .replace("{company}", user.company or "")
    )
