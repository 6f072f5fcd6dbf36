from datetime import datetime, timezone

import pytest

# 2024-03-10 00:00:00 UTC
MARCH_10 = 1710028800
DAY = 86400


def forecast_entry(dt: int, temp: float) -> dict:
    return {
        "dt": dt,
        "dt_txt": datetime.fromtimestamp(dt, timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
        "main": {"temp": temp},
    }


def make_forecast(days: int = 5, start: int = MARCH_10, skip=()) -> list[dict]:
    """3-hour entries for `days` days; midday temp is 10 + day index."""
    entries = []
    for d in range(days):
        for hour in range(0, 24, 3):
            dt = start + d * DAY + hour * 3600
            if dt in skip:
                continue
            temp = 10.0 + d if hour == 12 else 0.5 * hour
            entries.append(forecast_entry(dt, temp))
    return entries


@pytest.fixture
def london_geo():
    return [{"name": "London", "lat": 51.5072, "lon": -0.1276, "country": "GB", "state": "England"}]


@pytest.fixture
def current_payload():
    return {
        "name": "London",
        "weather": [{"icon": "10d", "description": "light rain"}],
        "main": {"temp": 8.5, "feels_like": 6.49, "humidity": 81, "pressure": 1012},
        "wind": {"speed": 4.1},
    }


@pytest.fixture
def forecast_payload():
    return {"list": make_forecast(days=6)}
