"""SMS channel registry.

Uses the logging adapter by default; SMS_ADAPTER=fake switches to the
in-memory recorder.
"""

from dispatch.channel.sms_port import SMSPort
from dispatch.config import load_settings

_sms_instance: SMSPort | None = None


def get_sms_channel() -> SMSPort:
    """Return the configured SMS adapter (singleton)."""
    global _sms_instance
    if _sms_instance is None:
        adapter = load_settings().sms_adapter
        if adapter == "log":
            from dispatch.channel.log_sms import LoggingSMSAdapter

            _sms_instance = LoggingSMSAdapter()
        elif adapter == "fake":
            from dispatch.channel.fake_sms import FakeSMSAdapter

            _sms_instance = FakeSMSAdapter()
        else:
            raise ValueError(f"Unknown SMS adapter: {adapter}")
    return _sms_instance


def set_sms_channel(channel: SMSPort) -> None:
    global _sms_instance
    _sms_instance = channel


def reset_sms_channel() -> None:
    """Reset the SMS singleton (useful for testing)."""
    global _sms_instance
    _sms_instance = None
