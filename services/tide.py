from __future__ import annotations#import annotation for compatability across python
import re, logging, datetime as dt#regular expressions, logging and datetime module
from typing import Dict, List, Optional

from bs4 import BeautifulSoup#html parsing library

from services.errors import FormatError, InvalidDateError
from services.models import Classification, SourcePeriod
from services.period import MonthContext, decode_ordinal_day

logger = logging.getLogger(__name__)

ROW_SELECTOR = "tr.row1, tr.row2"#the council table alternates two row styles, both hold data
MIN_CELLS = 6#anything shorter is a header or a broken row

#"11:05 until 19:15", "23:00 until 07:45 (Sat)" or "23:00 (Fri) until 07:45"
#a day name after the end time means it finishes the next day
#a day name after the start time means it began on the day before the row
RANGE_RE = re.compile(
    r"(\d{2}:\d{2})(?:\s*\((\w+)\))?\s+until\s+(\d{2}:\d{2})(?:\s*\((\w+)\))?",
    re.I,
)
UNTIL_MARKER = "until"


def _cell_text(cell) -> str:
    return " ".join(cell.stripped_strings)#all text in the cell with tags dropped


def _cell_classification(cell) -> Optional[Classification]:
    classes = [c.lower() for c in (cell.get("class") or [])]
    if "safe" in classes:
        return Classification.SAFE
    if "unsafe" in classes:
        return Classification.UNSAFE
    return None


def _same_weekday(hint: str, weekday: Optional[str]) -> bool:
    #"Sat" and "Saturday" name the same day
    if not weekday:
        return True
    return hint[:3].lower() == weekday.strip()[:3].lower()


def row_base_date(context: MonthContext, day: int) -> dt.date:
    try:
        return dt.date(context.year, context.month, day)
    except ValueError as e:
        raise InvalidDateError(f"Day {day} is not a valid date in {context.label}: {e}") from e


def parse_time_range(
    text: str,
    base_date: dt.date,
    classification: Classification = Classification.SAFE,
    weekday: Optional[str] = None,
) -> Optional[SourcePeriod]:
    """Parse "HH:MM until HH:MM [(Day)]" into a SourcePeriod.

    Returns None when the text is not a time range, a cell that only holds
    a note is not an error.
    """
    m = RANGE_RE.search(text or "")
    if not m:
        return None

    start, start_hint, end, end_hint = m.groups()
    start_date = base_date
    if start_hint and not _same_weekday(start_hint, weekday):
        start_date = base_date - dt.timedelta(days=1)#carried over from the previous evening

    end_date = start_date
    if end_hint or end < start or start_date != base_date:#zero padded so string compare is clock order
        end_date = start_date + dt.timedelta(days=1)

    return SourcePeriod(
        classification=classification,
        start=start,
        end=end,
        start_date=start_date,
        end_date=end_date,
    )


def _parse_row(row, context: MonthContext) -> Optional[tuple]:#returns (date, safe periods) or None to skip
    cells = row.find_all("td")
    if len(cells) < MIN_CELLS:
        logger.debug(f"Skipping row with {len(cells)} cells")
        return None

    weekday = _cell_text(cells[0])
    day = decode_ordinal_day(_cell_text(cells[1]))
    base_date = row_base_date(context, day)

    periods: List[SourcePeriod] = []
    for cell in cells:
        classification = _cell_classification(cell)
        if classification is None:
            continue
        text = _cell_text(cell)
        if UNTIL_MARKER not in text.lower():#informational cell, no range
            continue
        period = parse_time_range(text, base_date, classification, weekday)
        if period:
            periods.append(period)

    #only safe periods that start today, a period running over midnight belongs to the day it starts
    safe = [p for p in periods if p.is_safe and p.start_date == base_date]
    return base_date, safe


def extract_day_periods(html: str, context: MonthContext) -> Dict[dt.date, List[SourcePeriod]]:
    """Read every calendar row of a council crossing-times page.

    Returns the safe periods per date, dates without a safe period are left out.
    Bad rows are logged and skipped, the rest of the table still gets read.
    """
    soup = BeautifulSoup(html, "lxml")#parse html string into beautiful soup object
    days: Dict[dt.date, List[SourcePeriod]] = {}

    for row in soup.select(ROW_SELECTOR):
        try:
            parsed = _parse_row(row, context)
        except (InvalidDateError, FormatError) as e:
            logger.warning(f"Skipping row: {e}")
            continue
        if not parsed:
            continue
        base_date, safe = parsed
        if safe:
            days[base_date] = safe

    return days
