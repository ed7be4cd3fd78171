"""Google Distance Matrix adapter.

Looks up the driving distance between two addresses over HTTPS. Any failure
raises DistanceLookupError; callers that must not fail wrap this adapter in
a FallbackEstimator.
"""

import requests
import structlog

from dispatch.estimator.port import DistanceEstimate, DistanceEstimator, price_for
from dispatch.exceptions import DistanceLookupError

logger = structlog.get_logger(__name__)

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


class DistanceMatrixEstimator(DistanceEstimator):
    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        base_url: str = DISTANCE_MATRIX_URL,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url
        self.session = session or requests.Session()

    def estimate(self, origin: str, destination: str) -> DistanceEstimate:
        if not self.api_key:
            raise DistanceLookupError("Distance matrix API key is not configured")
        if not origin or not destination:
            raise DistanceLookupError("Both origin and destination addresses are required")

        try:
            response = self.session.get(
                self.base_url,
                params={
                    "origins": origin,
                    "destinations": destination,
                    "units": "metric",
                    "key": self.api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise DistanceLookupError(f"Distance matrix request failed: {exc}") from exc

        return self._parse(data)

    def _parse(self, data: dict) -> DistanceEstimate:
        if not isinstance(data, dict) or data.get("status") != "OK":
            status = data.get("status") if isinstance(data, dict) else None
            raise DistanceLookupError(f"Invalid response from distance matrix: status={status}")

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError) as exc:
            raise DistanceLookupError("Distance matrix response has no route element") from exc

        if element.get("status") != "OK":
            raise DistanceLookupError(f"Could not route between addresses: {element.get('status')}")

        try:
            meters = float(element["distance"]["value"])
            duration = str(element["duration"]["text"])
        except (KeyError, TypeError, ValueError) as exc:
            raise DistanceLookupError("Distance matrix element is malformed") from exc

        distance_km = float(round(meters / 1000))
        logger.debug("Distance matrix lookup succeeded", distance_km=distance_km, duration=duration)
        return DistanceEstimate(
            distance_km=distance_km,
            duration_label=duration,
            cost=price_for(distance_km),
            source="distance_matrix",
        )
