import asyncio
import logging
from typing import Set

from app.core.enums import SMSStatus
from app.notifications.gateway import SMSGateway

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Fire-and-forget delivery. `dispatch` returns the status to record in the SMS log right away:
    Failed only when the request is rejected before it reaches the gateway, otherwise Sent.
    The gateway's eventual result is logged but not written back to the SMS log.
    """

    def __init__(self, gateway: SMSGateway) -> None:
        self.gateway = gateway
        self._pending: Set[asyncio.Task] = set()

    def dispatch(self, phone_number: str, message: str) -> SMSStatus:
        if not phone_number or not phone_number.strip():
            logger.warning("SMS not dispatched: empty phone number")
            return SMSStatus.FAILED
        task = asyncio.get_running_loop().create_task(self._deliver(phone_number.strip(), message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return SMSStatus.SENT

    async def _deliver(self, phone_number: str, message: str) -> None:
        try:
            result = await self.gateway.send(phone_number, message)
        except Exception:
            # Detached task: nothing awaits it, so the error must end here.
            logger.exception("SMS gateway raised while sending to %s", phone_number)
            return
        if result.status == SMSStatus.SENT:
            logger.info("SMS delivered to %s (message id %s)", phone_number, result.message_id)
        else:
            logger.warning("SMS to %s failed: %s", phone_number, result.error)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for in-flight deliveries (shutdown, tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
