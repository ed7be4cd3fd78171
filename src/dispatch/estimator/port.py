"""Distance estimator port — abstract interface for delivery pricing.

The packing workflow programs against this port; adapters are swapped via
configuration or directly in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from dispatch.config import COST_PER_KM


@dataclass(frozen=True)
class DistanceEstimate:
    """Distance between pickup and drop-off and what delivering it costs."""

    distance_km: float
    duration_label: str
    cost: float
    source: str = "unknown"


def price_for(distance_km: float) -> float:
    """Delivery cost at the flat per-kilometre rate."""
    return distance_km * COST_PER_KM


class DistanceEstimator(ABC):
    """Abstract interface for distance estimators."""

    @abstractmethod
    def estimate(self, origin: str, destination: str) -> DistanceEstimate:
        """Estimate road distance and cost between two free-text addresses."""
        ...
