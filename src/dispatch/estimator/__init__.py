"""Distance estimator registry — pluggable delivery pricing.

Selects an estimator once, at first use, from the DISTANCE_ESTIMATOR
setting:

- ``auto`` (default): Google Distance Matrix with a random fallback when
  GOOGLE_MAPS_API_KEY is set, the random estimator otherwise
- ``random``: random estimator only
- ``fixed``: FixedDistanceEstimator answering FIXED_DISTANCE_KM
"""

from dispatch.config import load_settings
from dispatch.estimator.port import DistanceEstimate, DistanceEstimator

_estimator_instance: DistanceEstimator | None = None


def _build_estimator() -> DistanceEstimator:
    settings = load_settings()
    mode = settings.distance_estimator

    if mode == "fixed":
        from dispatch.estimator.fixed_adapter import FixedDistanceEstimator

        return FixedDistanceEstimator(settings.fixed_distance_km)

    from dispatch.estimator.random_adapter import RandomDistanceEstimator

    if mode == "random":
        return RandomDistanceEstimator()
    if mode == "auto":
        if not settings.google_maps_api_key:
            return RandomDistanceEstimator()

        from dispatch.estimator.distance_matrix import DistanceMatrixEstimator
        from dispatch.estimator.fallback import FallbackEstimator

        return FallbackEstimator(
            primary=DistanceMatrixEstimator(
                api_key=settings.google_maps_api_key,
                timeout=settings.distance_matrix_timeout,
            ),
            fallback=RandomDistanceEstimator(),
        )
    raise ValueError(f"Unknown distance estimator: {mode}")


def get_estimator() -> DistanceEstimator:
    """Return the configured estimator (singleton)."""
    global _estimator_instance
    if _estimator_instance is None:
        _estimator_instance = _build_estimator()
    return _estimator_instance


def set_estimator(estimator: DistanceEstimator) -> None:
    """Override the active estimator (useful for tests)."""
    global _estimator_instance
    _estimator_instance = estimator


def reset_estimator() -> None:
    """Drop the active estimator so the next call rebuilds it from settings."""
    global _estimator_instance
    _estimator_instance = None


def format_estimate(estimate: DistanceEstimate) -> str:
    """Render an estimate for display, e.g. ``"25 km (50 mins) - ₹250"``."""
    distance = int(estimate.distance_km) if float(estimate.distance_km).is_integer() else estimate.distance_km
    cost = int(estimate.cost) if float(estimate.cost).is_integer() else estimate.cost
    return f"{distance} km ({estimate.duration_label}) - ₹{cost}"
