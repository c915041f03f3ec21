from typing import Any, Dict, Optional

from services.clock import MINUTES_PER_DAY, minutes_to_time, time_to_minutes

CAUSEWAY_LEAD_MINUTES = 90#be at the causeway this long before the midpoint
PILGRIMS_WAY_MINUTES = 300#Belford to the causeway, Naismith's Rule
TYPICAL_MIN_HOURS = 6
TYPICAL_MAX_HOURS = 10


def plan_crossing(start: str, end: str) -> Dict[str, Any]:
    """Work out when to set off for a safe window from start to end.

    An end earlier than the start is taken to be the next day.
    """
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)
    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    duration = end_minutes - start_minutes
    midpoint = start_minutes + duration // 2
    causeway = midpoint - CAUSEWAY_LEAD_MINUTES
    depart = causeway - PILGRIMS_WAY_MINUTES

    hours = duration / 60
    return {
        "start": start,
        "end": end,
        "durationMinutes": duration,
        "midpoint": minutes_to_time(midpoint),
        "arriveCausewayBy": minutes_to_time(causeway),
        "departBelford": minutes_to_time(depart),
        "unusualDuration": hours < TYPICAL_MIN_HOURS or hours > TYPICAL_MAX_HOURS,
    }


def first_window_for(dataset: Dict[str, Any], date_key: str) -> Optional[Dict[str, Any]]:
    #first safe window listed for the day, or None
    windows = (dataset.get("data") or {}).get(date_key) or []
    return windows[0] if windows else None
