"""
OTP delivery

IOtpNotifier is the out-of-band channel (email) carrying one-time codes.
OtpDispatcher hands delivery to a scheduler so it never sits on the
response path, and logs delivery failures instead of propagating them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

logger = logging.getLogger(__name__)


def redact_destination(destination: str) -> str:
    """Redact an email address for logging"""
    if "@" not in destination:
        return "redacted"
    local, domain = destination.split("@", 1)
    return f"{local[:2]}***@{domain}"


class IOtpNotifier(ABC):
    """Out-of-band OTP delivery channel"""

    @abstractmethod
    async def deliver(self, destination: str, code: str) -> None:
        """Deliver a one-time code to the destination"""
        pass


class OtpDispatcher:
    """
    Fire-and-forget OTP delivery.

    `schedule` receives a coroutine function and its arguments, e.g.
    FastAPI's BackgroundTasks.add_task.
    """

    def __init__(self, notifier: IOtpNotifier, schedule: Callable[..., Any]):
        self.notifier = notifier
        self.schedule = schedule

    def dispatch(self, destination: str, code: str) -> None:
        self.schedule(self._deliver, destination, code)

    async def _deliver(self, destination: str, code: str) -> None:
        try:
            await self.notifier.deliver(destination, code)
        except Exception:
            # The challenge stays persisted; the user can request a new code
            logger.exception(
                f"OTP delivery failed for {redact_destination(destination)}"
            )
