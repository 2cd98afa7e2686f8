import logging

import httpx
import pytest

from app.core.enums import SMSStatus
from app.notifications.dispatcher import NotificationDispatcher
from app.notifications.gateway import AfricasTalkingGateway, SMSGateway, SMSSendResponse

API_URL = "https://sms.example.test/version1/messaging"


def _gateway(handler) -> AfricasTalkingGateway:
    return AfricasTalkingGateway(
        api_key="secret",
        username="sandbox",
        base_url=API_URL,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_send_success() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["api_key"] = request.headers["apiKey"]
        seen["body"] = request.content.decode()
        return httpx.Response(
            201,
            json={"SMSMessageData": {"Recipients": [{"status": "Success", "messageId": "ATXid_1"}]}},
        )

    result = await _gateway(handler).send("+250781123456", "Hello")

    assert result.status == SMSStatus.SENT
    assert result.message_id == "ATXid_1"
    assert seen["api_key"] == "secret"
    assert "username=sandbox" in seen["body"]


@pytest.mark.asyncio
async def test_send_rejected_recipient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"SMSMessageData": {"Recipients": [{"status": "InvalidPhoneNumber"}]}})

    result = await _gateway(handler).send("123", "Hello")

    assert result.status == SMSStatus.FAILED
    assert result.error == "InvalidPhoneNumber"


@pytest.mark.asyncio
async def test_send_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="The supplied authentication is invalid")

    result = await _gateway(handler).send("+250781123456", "Hello")

    assert result.status == SMSStatus.FAILED
    assert result.error.startswith("HTTP 401")


@pytest.mark.asyncio
async def test_send_network_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _gateway(handler).send("+250781123456", "Hello")

    assert result.status == SMSStatus.FAILED


class ExplodingGateway(SMSGateway):
    async def send(self, to: str, message: str) -> SMSSendResponse:
        raise RuntimeError("gateway down")


@pytest.mark.asyncio
async def test_dispatcher_contains_gateway_errors(caplog) -> None:
    dispatcher = NotificationDispatcher(ExplodingGateway())
    # the `app` logger does not propagate to the root, so listen on the module logger directly
    dispatcher_logger = logging.getLogger("app.notifications.dispatcher")
    dispatcher_logger.addHandler(caplog.handler)
    try:
        status = dispatcher.dispatch("+250781123456", "Hello")
        await dispatcher.drain()
    finally:
        dispatcher_logger.removeHandler(caplog.handler)

    assert status == SMSStatus.SENT
    assert dispatcher.pending == 0
    assert "gateway down" in caplog.text


@pytest.mark.asyncio
async def test_dispatcher_rejects_blank_phone() -> None:
    dispatcher = NotificationDispatcher(ExplodingGateway())

    assert dispatcher.dispatch("   ", "Hello") == SMSStatus.FAILED
    assert dispatcher.pending == 0
