# civic_reports/services/geocoding.py
import logging
from typing import Optional, Tuple

import requests

from civic_reports.core.config import Settings

logger = logging.getLogger(__name__)

Coordinates = Tuple[float, float]


class Geocoder:
    """Free-text address to (latitude, longitude) through a Nominatim search endpoint.

    ``lookup`` never raises: network errors, bad payloads and empty results
    all come back as None so a report can still be filed without coordinates.
    """

    def __init__(self, url: str, user_agent: str, timeout: float = 5.0):
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout

    @classmethod
    def from_settings(cls, cfg: Settings) -> Optional["Geocoder"]:
        if not cfg.geocoding_enabled:
            return None
        return cls(cfg.geocoder_url, cfg.geocoder_user_agent, cfg.geocoder_timeout)

    def lookup(self, address: str) -> Optional[Coordinates]:
        address = (address or "").strip()
        if not address:
            return None
        try:
            r = requests.get(
                self.url,
                params={"format": "json", "q": address, "limit": 1},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            r.raise_for_status()
            results = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Geocoding failed for %r: %s", address, e)
            return None
        if not results:
            logger.info("No geocoding match for %r", address)
            return None
        try:
            return float(results[0]["lat"]), float(results[0]["lon"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Unexpected geocoder payload for %r: %s", address, e)
            return None
