from __future__ import annotations
import time, logging, datetime as dt#courtesy delay, warnings and dates
from typing import Callable, Dict, Optional

import requests#http client for the sunrise sunset api

import config
from services.clock import convert_twelve_to_twenty_four, midpoint_minutes, minutes_to_time, within
from services.errors import FormatError, LookupFailure
from services.models import CrossingWindow, SolarData, SourcePeriod

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("sunrise", "sunset", "dawn", "dusk", "solar_noon", "golden_hour", "day_length")


class SunTimesClient:
    """Thin client for api.sunrisesunset.io at one fixed location."""

    def __init__(self, lat: float = config.HOLY_ISLAND_LAT, lng: float = config.HOLY_ISLAND_LNG,
                 url: str = config.SUN_API_URL, timeout: float = config.SUN_API_TIMEOUT, session=None):
        self.lat = lat
        self.lng = lng
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, date: dt.date) -> SolarData:
        #raises LookupFailure for anything that stops us getting a clean answer
        params = {"lat": self.lat, "lng": self.lng, "date": date.isoformat()}
        try:
            r = self.session.get(self.url, params=params, headers={"User-Agent": config.USER_AGENT},
                                 timeout=self.timeout)#timeout stops us waiting forever
            r.raise_for_status()
            payload = r.json()
        except (requests.RequestException, ValueError) as e:#network, http status or json body errors
            raise LookupFailure(f"Request failed: {e}") from e

        if not isinstance(payload, dict):
            raise LookupFailure("Response body is not a JSON object")
        if payload.get("status") != "OK":
            raise LookupFailure(f"API returned error: {payload.get('status')}")

        res = payload.get("results") or {}
        if not isinstance(res, dict):
            raise LookupFailure("Response results are not a JSON object")
        missing = [k for k in REQUIRED_FIELDS if not res.get(k)]
        if missing:
            raise LookupFailure(f"Response is missing {', '.join(missing)}")
        not_text = [k for k in REQUIRED_FIELDS if not isinstance(res[k], str)]
        if not_text:
            raise LookupFailure(f"Response fields are not text: {', '.join(not_text)}")

        return to_solar_data(res)


def to_solar_data(res: Dict[str, str]) -> SolarData:
    #api gives "5:14:04 AM" style times, we keep "05:14"
    sunrise = convert_twelve_to_twenty_four(res["sunrise"])
    sunset = convert_twelve_to_twenty_four(res["sunset"])
    golden_hour = convert_twelve_to_twenty_four(res["golden_hour"])
    return SolarData(
        sunrise=sunrise,
        sunset=sunset,
        dawn=convert_twelve_to_twenty_four(res["dawn"]),
        dusk=convert_twelve_to_twenty_four(res["dusk"]),
        solar_noon=convert_twelve_to_twenty_four(res["solar_noon"]),
        golden_hour_morning=f"{sunrise}-{golden_hour}",
        golden_hour_evening=f"{golden_hour}-{sunset}",
        day_length=res["day_length"],
    )


class SolarCache:
    """Per run memo of sun data, a None entry means the lookup already failed."""

    def __init__(self) -> None:
        self._entries: Dict[dt.date, Optional[SolarData]] = {}

    def __contains__(self, date: dt.date) -> bool:
        return date in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, date: dt.date) -> Optional[SolarData]:
        return self._entries.get(date)

    def put(self, date: dt.date, data: Optional[SolarData]) -> None:
        self._entries[date] = data


class SolarEnricher:
    """Adds sun data and daylight flags to safe periods, one lookup per date."""

    def __init__(self, client: Optional[SunTimesClient] = None, cache: Optional[SolarCache] = None,
                 delay: float = config.SUN_API_DELAY_SECONDS, sleep: Callable[[float], None] = time.sleep):
        self.client = client or SunTimesClient()
        self.cache = cache if cache is not None else SolarCache()
        self.delay = delay
        self.sleep = sleep

    def solar_data(self, date: dt.date) -> Optional[SolarData]:
        if date in self.cache:
            return self.cache.get(date)

        try:
            data = self.client.fetch(date)
        except LookupFailure as e:
            logger.warning(f"Could not fetch sun data for {date.isoformat()}: {e}")
            data = None
        self.cache.put(date, data)#failures are cached too, no retry this run

        if self.delay:
            self.sleep(self.delay)#be kind to the api after every real request
        return data

    def enrich_day(self, date: dt.date, periods) -> list:
        solar = self.solar_data(date)
        return [enrich(p, solar) for p in periods]


def enrich(period: SourcePeriod, solar: Optional[SolarData]) -> CrossingWindow:
    midpoint = minutes_to_time(midpoint_minutes(period.start, period.end, period.crosses_midnight))
    daylight = False
    if solar:
        try:
            daylight = within(midpoint, solar.sunrise, solar.sunset)
        except FormatError as e:#sun times the converter could not normalise
            logger.warning(f"Cannot compare {midpoint} with sun times for {period.start_date.isoformat()}: {e}")
    return CrossingWindow(period=period, midpoint=midpoint, daylight=daylight, photography=solar)
