"""
Data structures for the crossing-times pipeline.

- SourcePeriod: one labelled time range read from a table cell
- SolarData: one day's sunrise/sunset facts
- CrossingWindow: a safe period with its midpoint and daylight details
"""

from __future__ import annotations
import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Classification(str, Enum):
    SAFE = "safe"
    UNSAFE = "unsafe"


@dataclass(frozen=True)
class SourcePeriod:
    """Time range from one safe/unsafe cell."""
    classification: Classification
    start: str  # "HH:MM"
    end: str
    start_date: dt.date
    end_date: dt.date

    @property
    def is_safe(self) -> bool:
        return self.classification is Classification.SAFE

    @property
    def crosses_midnight(self) -> bool:
        return self.end_date != self.start_date


@dataclass(frozen=True)
class SolarData:
    """Sun times for one date, all in 24 hour HH:MM."""
    sunrise: str
    sunset: str
    dawn: str
    dusk: str
    solar_noon: str
    golden_hour_morning: str  # "sunrise-golden hour"
    golden_hour_evening: str  # "golden hour-sunset"
    day_length: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "sunrise": self.sunrise,
            "sunset": self.sunset,
            "dawn": self.dawn,
            "dusk": self.dusk,
            "solar_noon": self.solar_noon,
            "golden_hour_morning": self.golden_hour_morning,
            "golden_hour_evening": self.golden_hour_evening,
            "day_length": self.day_length,
        }


@dataclass(frozen=True)
class CrossingWindow:
    """Safe crossing period plus the derived midpoint and daylight flag."""
    period: SourcePeriod
    midpoint: str
    daylight: bool
    photography: Optional[SolarData] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.period.classification.value,
            "start": self.period.start,
            "end": self.period.end,
            "startDate": self.period.start_date.isoformat(),
            "endDate": self.period.end_date.isoformat(),
            "midpoint": self.midpoint,
            "daylight": self.daylight,
            "photography": self.photography.to_dict() if self.photography else None,
        }
