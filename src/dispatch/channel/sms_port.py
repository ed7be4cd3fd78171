"""Outbound SMS to vehicle owners."""

from abc import ABC, abstractmethod


class SMSPort(ABC):
    """Gateway that texts a delivery opportunity to a vehicle owner's phone.

    Adapters never raise for a rejected message; the fan-out treats SMS as
    best effort and only reads the returned status.
    """

    @abstractmethod
    def send(self, to: str, body: str) -> dict:
        """Text ``body`` to the number ``to``.

        Returns ``{"message_id", "status", "error"}`` where status is
        ``"sent"`` or ``"failed"``; ``message_id`` is None on failure.
        """
        ...
