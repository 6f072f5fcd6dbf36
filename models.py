"""
Data models for geocoding results, current conditions, forecast points
and the result of one search.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class GeoResult:
    latitude: float
    longitude: float
    name: str = ""
    country: str = ""
    state: str = ""

    @classmethod
    def from_candidate(cls, candidate: dict) -> GeoResult:
        """Build from one element of the geocoding response array."""
        return cls(
            latitude=float(candidate["lat"]),
            longitude=float(candidate["lon"]),
            name=candidate.get("name") or "",
            country=candidate.get("country") or "",
            state=candidate.get("state") or "",
        )

    @property
    def label(self) -> str:
        parts = [p for p in (self.name, self.state, self.country) if p]
        return ", ".join(parts) or f"{self.latitude}, {self.longitude}"


@dataclass(frozen=True)
class ForecastPoint:
    date: str
    temperature: float

    def to_dict(self) -> dict:
        return {"date": self.date, "temperature": self.temperature}


@dataclass
class CurrentConditions:
    """Current-weather payload, kept verbatim. Accessors only read from it."""
    raw: dict

    def _section(self, key: str) -> dict:
        value = self.raw.get(key)
        return value if isinstance(value, dict) else {}

    def _weather(self) -> dict:
        items = self.raw.get("weather")
        first = items[0] if isinstance(items, list) and items else None
        return first if isinstance(first, dict) else {}

    @property
    def name(self) -> str:
        return self.raw.get("name", "")

    @property
    def temperature(self) -> Optional[float]:
        return self._section("main").get("temp")

    @property
    def feels_like(self) -> Optional[float]:
        return self._section("main").get("feels_like")

    @property
    def humidity(self) -> Optional[float]:
        return self._section("main").get("humidity")

    @property
    def pressure(self) -> Optional[float]:
        return self._section("main").get("pressure")

    @property
    def wind_speed(self) -> Optional[float]:
        return self._section("wind").get("speed")

    @property
    def description(self) -> str:
        return self._weather().get("description", "")

    @property
    def icon(self) -> str:
        return self._weather().get("icon", "")


@dataclass
class PipelineResult:
    status: str = "ok"  # ok, input_error, not_found, fetch_error
    query: str = ""
    current: Optional[CurrentConditions] = None
    forecast: tuple[ForecastPoint, ...] = ()
    message: str = ""
    finished_at: str = field(default_factory=_now)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def has_chart(self) -> bool:
        return bool(self.forecast)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "query": self.query,
            "message": self.message,
            "current": self.current.raw if self.current else None,
            "forecast": [p.to_dict() for p in self.forecast],
            "finished_at": self.finished_at,
        }
