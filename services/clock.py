import re, logging#regular expressions and logging for format drift

from services.errors import FormatError

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*$")#"HH:MM", two colon separated integers
TWELVE_HOUR_RE = re.compile(r"(\d{1,2}):(\d{2}):(\d{2}) (AM|PM)")#"5:14:04 AM" as the sunrise api sends it


def time_to_minutes(time_str: str) -> int:
    #minutes since midnight for a 24 hour "HH:MM" string
    m = CLOCK_RE.match(time_str or "")
    if not m:
        raise FormatError(f"Expected HH:MM, got {time_str!r}")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise FormatError(f"Clock time out of range: {time_str!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    #wraps past midnight so 1500 -> "01:00" and -30 -> "23:30"
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def convert_twelve_to_twenty_four(time_str: str) -> str:
    """Turn "5:14:04 PM" into "17:14".

    Anything that does not look like the 12 hour format is handed back untouched,
    the sunrise api does not always promise its format so this stays lenient.
    The fallback is logged so a change upstream shows up in the run output.
    """
    m = TWELVE_HOUR_RE.search(time_str or "")
    if not m:
        logger.warning(f"Time {time_str!r} is not in 12 hour format, leaving it as is")
        return time_str

    hours, minutes, _seconds, period = m.groups()
    hours = int(hours)
    if period == "AM" and hours == 12:#midnight
        hours = 0
    elif period == "PM" and hours != 12:#noon stays 12
        hours += 12
    return f"{hours:02d}:{minutes}"


def midpoint_minutes(start: str, end: str, crosses_midnight: bool = False) -> int:
    """Minutes since midnight halfway between start and end.

    The end is pushed a day on when the range crosses midnight. Half minutes
    round down, so 23:00 until 07:45 gives 03:22.
    """
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)
    if crosses_midnight:
        end_minutes += MINUTES_PER_DAY
    return ((start_minutes + end_minutes) // 2) % MINUTES_PER_DAY


def within(time_str: str, first: str, last: str) -> bool:
    #inclusive check that a clock time sits between two others on the same day
    return time_to_minutes(first) <= time_to_minutes(time_str) <= time_to_minutes(last)
