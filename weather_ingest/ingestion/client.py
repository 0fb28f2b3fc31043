from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import requests
import structlog
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import UpstreamError, UpstreamMalformed, UpstreamUnavailable
from ..schemas.forecast import ForecastResponse

logger = structlog.get_logger()


class ForecastClient(Protocol):
    """Provider-agnostic daily forecast client interface.

    Implementations return the provider's daily records for a location and an
    inclusive date range.

    Failures are surfaced as three distinct errors:
    - `UpstreamUnavailable` when the provider cannot be reached at all.
    - `UpstreamError` when the provider answers with a status other than 200.
    - `UpstreamMalformed` when the body does not decode into `ForecastResponse`.
    """

    def fetch_forecast(self, location: str, start_date: str, end_date: str) -> ForecastResponse:
        """Fetch daily forecast records.

        Parameters
        ----------
        location : str
            Free-form location understood by the provider (city, address, "lat,lon").
        start_date : str
            First day of the range, as sent by the caller.
        end_date : str
            Last day of the range, as sent by the caller.

        Returns
        -------
        ForecastResponse
            Decoded payload with one `DailyForecast` per day.
        """
        ...


@dataclass(frozen=True)
class VisualCrossingClient:
    """Visual Crossing timeline implementation of `ForecastClient`.

    Notes and assumptions:
    - The location and both dates are appended to `base_url` as path segments.
    - The API key and unit system travel as `key` and `unitGroup` query parameters.
    - A fresh session is opened per call; instances are safe to share across
      worker threads.
    - Retries are disabled by default (`max_retries=0`).
    """

    api_key: str
    base_url: str = "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline/"
    unit_group: str = "metric"
    timeout_connect: float = 5.0
    timeout_read: float = 30.0
    max_retries: int = 0

    def _session(self) -> requests.Session:
        s = requests.Session()
        retries = Retry(
            total=self.max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def build_url(self, location: str, start_date: str, end_date: str) -> str:
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        segments = [quote(part, safe=",") for part in (location, start_date, end_date)]
        return base + "/".join(segments)

    def fetch_forecast(self, location: str, start_date: str, end_date: str) -> ForecastResponse:
        url = self.build_url(location, start_date, end_date)
        params = {"key": self.api_key, "unitGroup": self.unit_group}
        timeout = (self.timeout_connect, self.timeout_read)

        # The key stays out of the log line
        logger.info("forecast_request", url=url, unit_group=self.unit_group)
        try:
            with self._session() as s:
                resp = s.get(url, params=params, headers={"Content-Type": "application/json"}, timeout=timeout)
        except requests.RequestException as e:
            logger.warning("forecast_transport_failed", url=url, error=str(e))
            raise UpstreamUnavailable(f"Error making request to weather API: {e}") from e

        if resp.status_code != 200:
            logger.warning("forecast_bad_status", url=url, status=resp.status_code, body=resp.text[:200])
            raise UpstreamError(
                f"Error from weather API: status {resp.status_code}",
                upstream_status=resp.status_code,
            )

        try:
            payload = resp.json()
            forecast = ForecastResponse.model_validate(payload)
        except (ValueError, ValidationError) as e:
            logger.warning("forecast_decode_failed", url=url, error=str(e))
            raise UpstreamMalformed(f"Error decoding JSON response from weather API: {e}") from e

        logger.info("forecast_fetched", location=location, days=len(forecast.days))
        return forecast
