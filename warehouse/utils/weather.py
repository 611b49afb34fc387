"""
Warehouse location temperature from the OpenWeatherMap current weather API.
Advisory only: every failure is logged and reported as "no reading".
"""
import logging
from typing import Optional

import requests

from warehouse.config import settings

logger = logging.getLogger(__name__)


class WeatherClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        city: Optional[str] = None,
        units: Optional[str] = None,
        timeout: Optional[float] = None,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.WEATHER_API_KEY
        self.city = city or settings.WEATHER_CITY
        self.units = units or settings.WEATHER_UNITS
        self.timeout = timeout if timeout is not None else settings.WEATHER_TIMEOUT_SECONDS
        self.api_url = api_url or settings.WEATHER_API_URL
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def get_temperature(self) -> Optional[float]:
        """Current temperature in the configured units, or None."""
        if not self.enabled:
            logger.debug("WEATHER_API_KEY not set, skipping temperature lookup")
            return None

        params = {"q": self.city, "appid": self.api_key, "units": self.units}
        headers = {"Accept": "application/json"}
        try:
            response = self.session.get(self.api_url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
            return float(payload["main"]["temp"])
        except requests.exceptions.RequestException as e:
            logger.warning(f"Temperature lookup failed: {e}")
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Unexpected weather response: {e}")
        return None
