"""
Builds the crossing-times dataset from one or many council HTML pages.

Single file: one month, any failure stops the run.
Folder: every MM-YY.html file in name order, a bad file is logged and skipped,
and later files overwrite dates an earlier file already produced.
"""

from __future__ import annotations
import os, re, json, logging, datetime as dt
from typing import Any, Dict, List, Optional, Tuple

import config
from services.errors import SourceReadFailure, TideDataError
from services.models import CrossingWindow
from services.period import MonthContext, decode_month_context
from services.sun import SolarEnricher
from services.tide import extract_day_periods

logger = logging.getLogger(__name__)

SOURCE_FILE_RE = re.compile(r"(?<!\d)\d{2}-\d{2}\.html$")

DayWindows = Dict[dt.date, List[CrossingWindow]]


def read_source(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadFailure(f"Cannot read {path}: {e}") from e


def process_file(path: str, enricher: SolarEnricher) -> Tuple[MonthContext, DayWindows]:
    context = decode_month_context(path)#bad name fails before the file is even opened
    html = read_source(path)
    days = extract_day_periods(html, context)

    windows: DayWindows = {}
    for date in sorted(days):
        windows[date] = enricher.enrich_day(date, days[date])
    return context, windows


def serialize_days(days: DayWindows) -> Dict[str, List[Dict[str, Any]]]:
    #sorted for readability, readers look dates up by key
    return {date.isoformat(): [w.to_dict() for w in days[date]] for date in sorted(days)}


def _timestamp(now: Optional[dt.datetime] = None) -> str:
    return (now or dt.datetime.now(dt.timezone.utc)).isoformat()


def build_month_dataset(path: str, enricher: SolarEnricher, now: Optional[dt.datetime] = None) -> Tuple[MonthContext, Dict[str, Any]]:
    context, days = process_file(path, enricher)
    logger.info(f"Parsed tide data for {context.label}: {len(days)} days")
    dataset = {
        "lastUpdated": _timestamp(now),
        "source": config.TIDES_SOURCE_LABEL,
        "month": context.label,
        "data": serialize_days(days),
    }
    return context, dataset


def list_source_files(folder: str) -> List[str]:
    return sorted(name for name in os.listdir(folder) if SOURCE_FILE_RE.search(name))


def merge_days(combined: DayWindows, days: DayWindows, source: str = "") -> None:
    #last write wins, but say so when a date is already there
    for date, windows in days.items():
        if date in combined:
            logger.warning(f"{date.isoformat()} from {source or 'a later file'} overwrites data already loaded")
        combined[date] = windows


def build_combined_dataset(folder: str, enricher: SolarEnricher, now: Optional[dt.datetime] = None) -> Dict[str, Any]:
    files = list_source_files(folder)
    if not files:
        logger.warning(f"No MM-YY.html files found in {folder}")
    else:
        logger.info(f"Found {len(files)} HTML files to process: {', '.join(files)}")

    combined: DayWindows = {}
    months: List[str] = []
    total_days = 0

    for name in files:
        path = os.path.join(folder, name)
        logger.info(f"Processing {name}")
        try:
            context, days = process_file(path, enricher)
        except (TideDataError, OSError, ValueError) as e:#one bad month shouldn't lose the rest
            logger.error(f"Error processing {name}: {e}")
            continue

        merge_days(combined, days, name)
        months.append(context.label)
        total_days += len(days)
        logger.info(f"{name}: {len(days)} days processed")

    logger.info(f"{total_days} total days across {len(months)} months")
    return {
        "lastUpdated": _timestamp(now),
        "source": config.TIDES_SOURCE_LABEL,
        "months": months,
        "totalDays": total_days,
        "data": serialize_days(combined),
    }


def write_dataset(dataset: Dict[str, Any], path: str) -> str:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dataset, f, indent=2)
    return path


def load_dataset(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
