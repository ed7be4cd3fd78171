"""Fixed distance estimator — deterministic estimator for tests and local runs."""

import math

from dispatch.estimator.port import DistanceEstimate, DistanceEstimator, price_for


class FixedDistanceEstimator(DistanceEstimator):
    """Always answers with the configured distance and records every call."""

    def __init__(self, distance_km: float = 10.0):
        self.distance_km = distance_km
        self.calls: list[tuple[str, str]] = []

    def configure(self, distance_km: float) -> None:
        self.distance_km = distance_km

    def estimate(self, origin: str, destination: str) -> DistanceEstimate:
        self.calls.append((origin, destination))
        return DistanceEstimate(
            distance_km=float(self.distance_km),
            duration_label=f"{math.floor(self.distance_km / 30 * 60)} mins",
            cost=price_for(float(self.distance_km)),
            source="fixed",
        )

    def reset(self) -> None:
        self.calls.clear()
