"""In-memory SMS gateway for dispatch tests.

Records every delivery-opportunity text it accepts and can be told to
reject the whole gateway or individual vehicle-owner numbers.
"""

from uuid import uuid4

from dispatch.channel.sms_port import SMSPort

DEFAULT_FAILURE = "SMS delivery failed"


class FakeSMSAdapter(SMSPort):
    def __init__(self):
        self.sent_messages: list[dict] = []
        self.rejected: list[dict] = []
        self.should_succeed = True
        self.failure_reason = DEFAULT_FAILURE
        self.failures: dict[str, str] = {}

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = DEFAULT_FAILURE,
        fail_for: dict[str, str] | list[str] | tuple = (),
    ):
        """Set gateway behaviour.

        ``fail_for`` names phone numbers that are rejected even when the
        gateway is up, either as a list or as a mapping of number to error.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        if isinstance(fail_for, dict):
            self.failures = dict(fail_for)
        else:
            self.failures = {phone: failure_reason for phone in fail_for}

    def send(self, to: str, body: str) -> dict:
        error = None
        if not self.should_succeed:
            error = self.failure_reason
        elif to in self.failures:
            error = self.failures[to]
        elif not to:
            error = "No phone number on file"

        if error is not None:
            self.rejected.append({"to": to, "body": body, "error": error})
            return {"message_id": None, "status": "failed", "error": error}

        message_id = f"sms-{uuid4().hex[:12]}"
        self.sent_messages.append({"message_id": message_id, "to": to, "body": body})
        return {"message_id": message_id, "status": "sent"}

    def messages_to(self, phone: str) -> list[str]:
        """Bodies accepted for ``phone``, oldest first."""
        return [message["body"] for message in self.sent_messages if message["to"] == phone]

    def reset(self):
        self.sent_messages.clear()
        self.rejected.clear()
        self.failures = {}
        self.should_succeed = True
        self.failure_reason = DEFAULT_FAILURE
