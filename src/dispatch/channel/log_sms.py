"""Logging SMS adapter — writes the message to the log instead of a gateway.

Used until a real SMS/WhatsApp gateway is wired in.
"""

from uuid import uuid4

import structlog

from dispatch.channel.sms_port import SMSPort

logger = structlog.get_logger(__name__)


class LoggingSMSAdapter(SMSPort):
    def send(self, to: str, body: str) -> dict:
        if not to:
            return {"message_id": None, "status": "failed", "error": "No phone number on file"}

        message_id = f"log-{uuid4().hex[:12]}"
        logger.info("SMS would be sent", to=to, message_id=message_id, body=body)
        return {"message_id": message_id, "status": "sent"}
