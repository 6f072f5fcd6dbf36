"""
Pipeline — runs one city search end to end and publishes the result.

Flow (each step must succeed before the next one starts):
  1. Validate the city name (no network on failure)
  2. Geocode the city to coordinates
  3. Fetch current conditions
  4. Fetch the 5-day/3-hour forecast
  5. Normalize the forecast to one midday point per day

The dashboard and the Telegram bot share one pipeline. Only the newest
search publishes its result; an older search that finishes late is
dropped so results from two searches are never mixed.
"""

from __future__ import annotations
import logging
import threading
from typing import Optional

import requests

from abilities.forecast import normalize_forecast
from abilities.weather import (
    resolve_city,
    fetch_current,
    fetch_forecast,
    InputError,
    NotFoundError,
    FetchError,
)
from config import OPENWEATHER_API_KEY
from models import PipelineResult

log = logging.getLogger(__name__)

MESSAGES = {
    "input_error": "Please enter a city name!",
    "not_found": "City not found!",
    "fetch_error": "Error fetching data. Please check your API key and city name.",
}


class WeatherPipeline:
    """
    One pipeline is shared by the dashboard threads and the bot workers.
    Each search opens its own requests.Session unless one is injected.
    `state` and the published result are updated under `_lock`; with
    overlapping searches `state` reflects whichever moved last.
    """

    def __init__(self, api_key: str = OPENWEATHER_API_KEY, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.session = session
        self.state = "idle"  # idle, resolving, fetching, normalizing
        self.last_result: Optional[PipelineResult] = None
        self._lock = threading.Lock()
        self._ticket = 0

    def _set_state(self, state: str):
        with self._lock:
            log.debug(f"state {self.state} -> {state}")
            self.state = state

    def _begin(self) -> int:
        """Take a ticket for a new search and clear the published result."""
        with self._lock:
            self._ticket += 1
            self.last_result = None
            return self._ticket

    def _publish(self, ticket: int, result: PipelineResult) -> bool:
        with self._lock:
            if ticket != self._ticket:
                log.info(f"Dropping superseded result for {result.query!r}")
                return False
            self.last_result = result
            return True

    # ── Core ────────────────────────────────────────────────────

    def run(self, city: str, tz=None) -> PipelineResult:
        """
        Run the search and return an ok result.
        Raises InputError, NotFoundError or FetchError.
        """
        city = (city or "").strip()
        if not city:
            raise InputError("City name is empty")

        ticket = self._begin()
        if self.session is not None:
            current, points = self._fetch(city, self.session, tz)
        else:
            with requests.Session() as session:
                current, points = self._fetch(city, session, tz)

        result = PipelineResult(
            status="ok",
            query=city,
            current=current,
            forecast=tuple(points),
        )
        self._publish(ticket, result)
        log.info(f"Weather for {city!r}: {len(points)} forecast point(s)")
        return result

    def _fetch(self, city: str, session: requests.Session, tz):
        try:
            self._set_state("resolving")
            geo = resolve_city(city, self.api_key, session)
            log.debug(f"Resolved {city!r} to {geo.latitude}, {geo.longitude}")

            self._set_state("fetching")
            current = fetch_current(geo, self.api_key, session)
            entries = fetch_forecast(geo, self.api_key, session)

            self._set_state("normalizing")
            try:
                points = normalize_forecast(entries, tz=tz)
            except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
                raise FetchError("Malformed forecast entry") from e
        finally:
            self._set_state("idle")
        return current, points

    def search(self, city: str, tz=None) -> PipelineResult:
        """Run the search, turning the expected errors into a result."""
        try:
            return self.run(city, tz=tz)
        except InputError:
            status = "input_error"
        except NotFoundError as e:
            log.warning(str(e))
            status = "not_found"
        except FetchError as e:
            # not logging __cause__: requests errors carry the URL with appid
            log.warning(f"Error fetching data for {city!r}: {e}")
            status = "fetch_error"
        return PipelineResult(status=status, query=(city or "").strip(), message=MESSAGES[status])
