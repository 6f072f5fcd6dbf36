"""
Weather card — the fields shown for current conditions, plus a
plain-text rendering for chat replies.
"""

import math
from typing import Optional

from models import CurrentConditions, PipelineResult

ICONS = {
    "01d": "☀️", "01n": "🌙",
    "02d": "⛅", "02n": "☁️",
    "03d": "☁️", "03n": "☁️",
    "04d": "☁️", "04n": "☁️",
    "09d": "🌧️", "09n": "🌧️",
    "10d": "🌦️", "10n": "🌧️",
    "11d": "⛈️", "11n": "⛈️",
    "13d": "❄️", "13n": "❄️",
    "50d": "🌫️", "50n": "🌫️",
}
DEFAULT_ICON = "🌤️"


def weather_icon(code: Optional[str]) -> str:
    if not isinstance(code, str):
        return DEFAULT_ICON
    return ICONS.get(code, DEFAULT_ICON)


def round_temp(value: Optional[float]) -> Optional[int]:
    """Round half up (2.5 -> 3, -2.5 -> -2). Python's round() is banker's."""
    if not isinstance(value, (int, float)):
        return None
    return math.floor(value + 0.5)


def card_fields(current: CurrentConditions) -> dict:
    return {
        "name": current.name,
        "icon": weather_icon(current.icon),
        "temp": round_temp(current.temperature),
        "description": current.description,
        "feels_like": round_temp(current.feels_like),
        "humidity": current.humidity,
        "wind_speed": current.wind_speed,
        "pressure": current.pressure,
    }


def format_card(result: PipelineResult) -> str:
    """Text version of the card and forecast, for Telegram."""
    if not result.ok:
        return result.message
    lines = []
    if result.current:
        c = card_fields(result.current)
        lines += [
            f"{c['icon']} {c['name']}",
            f"{c['temp']}°C, {c['description']}",
            f"Feels like: {c['feels_like']}°C",
            f"Humidity: {c['humidity']}%",
            f"Wind Speed: {c['wind_speed']} m/s",
            f"Pressure: {c['pressure']} hPa",
        ]
    if result.forecast:
        lines += ["", "5-Day Temperature Forecast"]
        lines += [f"  {p.date}: {p.temperature}°C" for p in result.forecast]
    return "\n".join(lines)
