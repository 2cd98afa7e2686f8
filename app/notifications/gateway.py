"""SMS transport. Delivery is best-effort: every failure is mapped to a `Failed` response, never raised."""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from app.core.config import Settings
from app.core.enums import SMSStatus

logger = logging.getLogger(__name__)


class SMSSendResponse(BaseModel):
    status: SMSStatus
    message_id: Optional[str] = None
    error: Optional[str] = None


class SMSGateway:
    async def send(self, to: str, message: str) -> SMSSendResponse:
        raise NotImplementedError


class AfricasTalkingGateway(SMSGateway):
    """Africa's Talking messaging API (form-encoded POST, JSON response)."""

    def __init__(
        self,
        api_key: str,
        username: str,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.username = username
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def send(self, to: str, message: str) -> SMSSendResponse:
        headers = {"Accept": "application/json", "apiKey": self.api_key}
        data = {"username": self.username, "to": to, "message": message}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.base_url, data=data, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("SMS network error for %s: %s", to, e)
            return SMSSendResponse(status=SMSStatus.FAILED, error=str(e) or "Network failure")

        if not response.is_success:
            logger.warning("SMS gateway returned HTTP %s for %s", response.status_code, to)
            return SMSSendResponse(
                status=SMSStatus.FAILED, error=f"HTTP {response.status_code}: {response.text}"
            )

        try:
            payload = response.json()
        except ValueError:
            return SMSSendResponse(status=SMSStatus.FAILED, error="Malformed gateway response")

        recipients = (payload.get("SMSMessageData") or {}).get("Recipients") or []
        recipient = recipients[0] if recipients else None
        if recipient and recipient.get("status") == "Success":
            return SMSSendResponse(status=SMSStatus.SENT, message_id=recipient.get("messageId"))
        return SMSSendResponse(
            status=SMSStatus.FAILED,
            error=(recipient or {}).get("status") or "Unknown error",
        )


class LoggingGateway(SMSGateway):
    """Used when SMS delivery is disabled: the message only goes to the log."""

    async def send(self, to: str, message: str) -> SMSSendResponse:
        logger.info("SMS (not delivered) to %s: %s", to, message)
        return SMSSendResponse(status=SMSStatus.SENT)


def build_gateway(settings: Settings) -> SMSGateway:
    if settings.sms_enabled and settings.sms_api_key:
        return AfricasTalkingGateway(
            api_key=settings.sms_api_key,
            username=settings.sms_username,
            base_url=settings.sms_base_url,
            timeout=settings.sms_timeout_seconds,
        )
    if settings.sms_enabled:
        logger.warning("SMS_ENABLED is set but SMS_API_KEY is missing; messages will only be logged")
    return LoggingGateway()
