from __future__ import annotations
import os, re#path handling and filename pattern
from dataclasses import dataclass

from services.errors import FormatError

FILENAME_RE = re.compile(r"(?<!\d)(\d{2})-(\d{2})(?:\.html?)?$", re.I)#"09-25.html" means september 2025

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass(frozen=True)
class MonthContext:
    """Month and year a source file covers."""
    month: int
    year: int
    month_key: str  # "09"
    year_key: str  # "2025"

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def label(self) -> str:
        return f"{self.month_name} {self.year}"

    @property
    def output_name(self) -> str:
        return f"tides-{self.year_key}-{self.month_key}.json"


def decode_month_context(identifier: str) -> MonthContext:
    #reads the month and two digit year out of a file name or path
    name = os.path.basename(identifier or "")
    m = FILENAME_RE.search(name)
    if not m:
        raise FormatError(f"File name must follow the pattern MM-YY.html (e.g. 09-25.html), got {identifier!r}")

    month_key, year_short = m.groups()
    month = int(month_key)
    if not 1 <= month <= 12:
        raise FormatError(f"Month {month_key} in {identifier!r} is not a calendar month")

    year = 2000 + int(year_short)
    return MonthContext(month=month, year=year, month_key=month_key, year_key=str(year))


def decode_ordinal_day(label: str) -> int:
    #"1st" -> 1, "22nd" -> 22, out of range days are left for the date check
    digits = re.sub(r"\D", "", label or "")
    if not digits:
        raise FormatError(f"No day number in {label!r}")
    return int(digits)
