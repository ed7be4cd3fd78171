"""Random distance estimator — plausible stand-in when no routing is available."""

import math
import random

from dispatch.estimator.port import DistanceEstimate, DistanceEstimator, price_for

MIN_DISTANCE_KM = 5
MAX_DISTANCE_KM = 55


class RandomDistanceEstimator(DistanceEstimator):
    """Samples a whole-kilometre distance uniformly from a fixed range."""

    def __init__(
        self,
        rng: random.Random | None = None,
        min_km: int = MIN_DISTANCE_KM,
        max_km: int = MAX_DISTANCE_KM,
    ) -> None:
        self.rng = rng or random.Random()
        self.min_km = min_km
        self.max_km = max_km

    def estimate(self, origin: str, destination: str) -> DistanceEstimate:
        distance_km = float(self.rng.randint(self.min_km, self.max_km))
        return DistanceEstimate(
            distance_km=distance_km,
            duration_label=f"{math.floor(distance_km / 30 * 60)} mins",
            cost=price_for(distance_km),
            source="random",
        )
