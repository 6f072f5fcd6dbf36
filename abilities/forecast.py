"""
Forecast normalization — reduce the 3-hour forecast list to one midday
reading per day and reshape it for the chart.
"""

import logging
from datetime import datetime, tzinfo
from typing import Iterable, Optional

from config import FORECAST_DAYS, DAILY_SAMPLE_TIME, DATE_LOCALE
from models import ForecastPoint

log = logging.getLogger(__name__)

# Short numeric date per locale, no zero-padding unless the locale pads.
DATE_FORMATS = {
    "en_US": lambda d: f"{d.month}/{d.day}/{d.year}",
    "en_GB": lambda d: f"{d.day:02d}/{d.month:02d}/{d.year}",
    "de_DE": lambda d: f"{d.day}.{d.month}.{d.year}",
    "ISO": lambda d: d.strftime("%Y-%m-%d"),
}


def format_date(epoch: float, tz: Optional[tzinfo] = None, locale: str = DATE_LOCALE) -> str:
    """Calendar date of `epoch` in `tz` (process local time when None)."""
    fmt = DATE_FORMATS.get(locale)
    if fmt is None:
        log.warning(f"Unknown date locale {locale!r}, using en_US")
        fmt = DATE_FORMATS["en_US"]
    return fmt(datetime.fromtimestamp(epoch, tz))


def normalize_forecast(
    entries: Iterable[dict],
    limit: int = FORECAST_DAYS,
    sample_time: str = DAILY_SAMPLE_TIME,
    tz: Optional[tzinfo] = None,
    locale: str = DATE_LOCALE,
) -> list[ForecastPoint]:
    """
    Keep entries whose `dt_txt` contains `sample_time`, in input order,
    truncated to `limit`. Days without that sample are simply missing.
    Temperatures pass through unrounded.
    """
    daily = [e for e in entries if sample_time in e.get("dt_txt", "")][:limit]
    return [
        ForecastPoint(
            date=format_date(e["dt"], tz, locale),
            temperature=e["main"]["temp"],
        )
        for e in daily
    ]


def chart_series(points: Iterable[ForecastPoint]) -> dict:
    """Labels and values for a line chart."""
    points = list(points)
    return {
        "labels": [p.date for p in points],
        "temperatures": [p.temperature for p in points],
    }
