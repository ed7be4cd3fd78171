"""Runtime settings for the dispatch context.

Adapters and the fan-out worker read their knobs from environment variables,
mirroring how carrier and channel adapters are selected elsewhere. Protean's
own configuration (databases, brokers, processing mode) lives in domain.toml.
"""

import os
from dataclasses import dataclass

COST_PER_KM = 10


@dataclass(frozen=True)
class DispatchSettings:
    distance_estimator: str = "auto"
    google_maps_api_key: str = ""
    distance_matrix_timeout: float = 10.0
    fixed_distance_km: float = 10.0
    sms_adapter: str = "log"
    fanout_max_attempts: int = 3
    fanout_backoff_seconds: float = 0.5
    fanout_backoff_cap_seconds: float = 30.0
    assumed_speed_kmh: float = 30.0


def _float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_settings() -> DispatchSettings:
    """Read dispatch settings from the environment, falling back to defaults."""
    return DispatchSettings(
        distance_estimator=os.environ.get("DISTANCE_ESTIMATOR", "auto").lower(),
        google_maps_api_key=os.environ.get("GOOGLE_MAPS_API_KEY", ""),
        distance_matrix_timeout=_float("DISTANCE_MATRIX_TIMEOUT", 10.0),
        fixed_distance_km=_float("FIXED_DISTANCE_KM", 10.0),
        sms_adapter=os.environ.get("SMS_ADAPTER", "log").lower(),
        fanout_max_attempts=max(1, _int("FANOUT_MAX_ATTEMPTS", 3)),
        fanout_backoff_seconds=max(0.0, _float("FANOUT_BACKOFF_SECONDS", 0.5)),
        fanout_backoff_cap_seconds=max(0.0, _float("FANOUT_BACKOFF_CAP_SECONDS", 30.0)),
        assumed_speed_kmh=_float("ASSUMED_SPEED_KMH", 30.0) or 30.0,
    )
