from __future__ import annotations

from typing import Protocol

from ..core.exceptions import MessagingError


class SmsGateway(Protocol):
    def send(self, *, to: str, body: str) -> str:
        """Deliver one SMS and return the provider's message id.

        Raises MessagingError when the provider rejects the message.
        """

        raise NotImplementedError


class UnconfiguredSmsGateway(SmsGateway):
    """Stand-in used when no SMS credentials are configured."""

    def send(self, *, to: str, body: str) -> str:
        raise MessagingError("SMS delivery is not configured")
