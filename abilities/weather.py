"""
Weather ability — OpenWeatherMap geocoding, current weather and
5-day/3-hour forecast.

Every call needs an API key passed as the `appid` query parameter.
"""

import logging
from typing import Optional

import requests

from config import (
    OPENWEATHER_API_KEY,
    GEO_URL,
    WEATHER_URL,
    FORECAST_URL,
    UNITS,
    REQUEST_TIMEOUT,
)
from models import GeoResult, CurrentConditions

log = logging.getLogger(__name__)


class WeatherError(Exception):
    """Base class for errors that end a search."""


class InputError(WeatherError):
    """City name is empty or whitespace."""


class NotFoundError(WeatherError):
    """Geocoding returned no candidates."""


class FetchError(WeatherError):
    """Network failure, non-success status or malformed payload."""


def _get_json(url: str, params: dict, session: Optional[requests.Session] = None):
    http = session or requests
    safe = {k: ("***" if k == "appid" else v) for k, v in params.items()}
    log.debug(f"GET {url} {safe}")
    try:
        resp = http.get(url, params=params, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except requests.JSONDecodeError as e:
        raise FetchError(f"Invalid JSON from {url}") from e
    except requests.RequestException as e:
        # HTTPError text embeds the full URL, including the key
        status = getattr(e.response, "status_code", None)
        raise FetchError(f"Request to {url} failed (status={status})") from e


def resolve_city(
    city: str,
    api_key: str = OPENWEATHER_API_KEY,
    session: Optional[requests.Session] = None,
) -> GeoResult:
    """Resolve a city name to the provider's top-ranked coordinates."""
    data = _get_json(GEO_URL, {"q": city, "limit": 1, "appid": api_key}, session)
    if not isinstance(data, list):
        raise FetchError(f"Unexpected geocoding payload for {city!r}")
    if not data:
        raise NotFoundError(f"City not found: {city}")
    try:
        return GeoResult.from_candidate(data[0])
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"Geocoding candidate for {city!r} has no coordinates") from e


def _coord_params(geo: GeoResult, api_key: str) -> dict:
    return {
        "lat": geo.latitude,
        "lon": geo.longitude,
        "appid": api_key,
        "units": UNITS,
    }


def fetch_current(
    geo: GeoResult,
    api_key: str = OPENWEATHER_API_KEY,
    session: Optional[requests.Session] = None,
) -> CurrentConditions:
    data = _get_json(WEATHER_URL, _coord_params(geo, api_key), session)
    if not isinstance(data, dict):
        raise FetchError("Unexpected current-weather payload")
    return CurrentConditions(raw=data)


def fetch_forecast(
    geo: GeoResult,
    api_key: str = OPENWEATHER_API_KEY,
    session: Optional[requests.Session] = None,
) -> list[dict]:
    """Return the raw 3-hour entries of the forecast window."""
    data = _get_json(FORECAST_URL, _coord_params(geo, api_key), session)
    entries = data.get("list") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise FetchError("Forecast payload has no 'list'")
    if not all(isinstance(e, dict) for e in entries):
        raise FetchError("Forecast list holds non-object entries")
    return entries
