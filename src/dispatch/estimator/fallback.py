"""Fallback estimator — answers from a second estimator when the first fails.

Any error from the primary estimator is logged and answered by the fallback.
"""

import structlog

from dispatch.estimator.port import DistanceEstimate, DistanceEstimator

logger = structlog.get_logger(__name__)


class FallbackEstimator(DistanceEstimator):
    def __init__(self, primary: DistanceEstimator, fallback: DistanceEstimator):
        self.primary = primary
        self.fallback = fallback

    def estimate(self, origin: str, destination: str) -> DistanceEstimate:
        try:
            return self.primary.estimate(origin, destination)
        except Exception as exc:
            logger.warning(
                "Primary distance estimator failed, using fallback",
                primary=type(self.primary).__name__,
                fallback=type(self.fallback).__name__,
                error=str(exc),
            )
            return self.fallback.estimate(origin, destination)
