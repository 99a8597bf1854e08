import dateparser
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional
import pytz
import re

from flighter.config import settings
from flighter.obs.logger import log_event


MONTHS = {
    "january": 1, "jan": 1, "february": 2, "feb": 2, "march": 3, "mar": 3,
    "april": 4, "apr": 4, "may": 5, "june": 6, "jun": 6, "july": 7, "jul": 7,
    "august": 8, "aug": 8, "september": 9, "sept": 9, "sep": 9, "october": 10, "oct": 10,
    "november": 11, "nov": 11, "december": 12, "dec": 12,
}

_MONTH_ALT = (
    "january|february|march|april|may|june|july|august|september|october|november|december"
    "|jan|feb|mar|apr|jun|jul|aug|sept|sep|oct|nov|dec"
)

ISO_DATE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")
US_SLASH_DATE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
US_DASH_DATE = re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})")
MONTH_DAY = re.compile(
    rf"\b({_MONTH_ALT})\s+(\d{{1,2}})(?:st|nd|rd|th)?\b(?:,?\s+(\d{{4}}))?"
)
DAY_MONTH = re.compile(
    rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s+({_MONTH_ALT})\b(?:\s+(\d{{4}}))?"
)
RELATIVE_DAY = re.compile(r"\b(today|tomorrow|yesterday)\b")
# Recognised but not resolved to a date yet; these fall through to the default.
RELATIVE_WEEKDAY = re.compile(
    r"\b(next|this)\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday|week|month)\b"
)
RELATIVE_SPAN = re.compile(r"\bin\s+(\d+)\s+(days?|weeks?|months?)\b")

_RELATIVE_OFFSETS = {"today": 0, "tomorrow": 1, "yesterday": -1}

DateMatcher = Callable[[str, date], Optional[date]]


def get_current_datetime(tz: str = "UTC") -> datetime:
    """Get current datetime with timezone"""
    return datetime.now(pytz.timezone(tz))


def today_in(tz: Optional[str] = None) -> date:
    return get_current_datetime(tz or settings.TZ).date()


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _match_iso(text: str, today: date) -> Optional[date]:
    m = ISO_DATE.search(text)
    if not m:
        return None
    return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def _match_us_slash(text: str, today: date) -> Optional[date]:
    m = US_SLASH_DATE.search(text)
    if not m:
        return None
    return _safe_date(int(m.group(3)), int(m.group(1)), int(m.group(2)))


def _match_us_dash(text: str, today: date) -> Optional[date]:
    m = US_DASH_DATE.search(text)
    if not m:
        return None
    return _safe_date(int(m.group(3)), int(m.group(1)), int(m.group(2)))


def _month_date(month_name: str, day_str: str, year_str: Optional[str], today: date) -> Optional[date]:
    month = MONTHS.get(month_name)
    day = int(day_str)
    if month is None or not 0 < day <= 31:
        return None
    year = int(year_str) if year_str else today.year
    dt = _safe_date(year, month, day)
    if dt is None:
        return None
    # No explicit year and already gone: the user means next year's date
    if not year_str and dt < today:
        dt = _safe_date(year + 1, month, day)
    return dt


def _match_month_day(text: str, today: date) -> Optional[date]:
    m = MONTH_DAY.search(text)
    if not m:
        return None
    return _month_date(m.group(1), m.group(2), m.group(3), today)


def _match_day_month(text: str, today: date) -> Optional[date]:
    m = DAY_MONTH.search(text)
    if not m:
        return None
    return _month_date(m.group(2), m.group(1), m.group(3), today)


def _match_relative_day(text: str, today: date) -> Optional[date]:
    m = RELATIVE_DAY.search(text)
    if not m:
        return None
    return today + timedelta(days=_RELATIVE_OFFSETS[m.group(1)])


def _match_unresolved(text: str, today: date) -> Optional[date]:
    m = RELATIVE_WEEKDAY.search(text) or RELATIVE_SPAN.search(text)
    if m:
        # TODO: resolve "next friday" / "in 2 weeks" instead of using the default offset
        log_event("date_phrase_unresolved", level="DEBUG", phrase=m.group(0))
    return None


# Most specific first; the first matcher returning a date wins.
DATE_MATCHERS: List[DateMatcher] = [
    _match_iso,
    _match_us_slash,
    _match_us_dash,
    _match_month_day,
    _match_day_month,
    _match_relative_day,
    _match_unresolved,
]


def default_departure(today: date) -> date:
    return today + timedelta(days=settings.DEFAULT_DEPARTURE_OFFSET_DAYS)


def parse_date(text: str, today: Optional[date] = None) -> str:
    """Extract a departure date from free text as YYYY-MM-DD.

    Matchers run in order over the lower-cased text and the first one that
    yields a real calendar date wins. Text that looks like a date but cannot
    be built into one (e.g. "2025-02-30") is skipped. When nothing matches the
    result is today plus the configured offset (7 days), so this never fails.
    """
    if today is None:
        today = today_in()
    lower = (text or "").lower()
    for matcher in DATE_MATCHERS:
        dt = matcher(lower, today)
        if dt is not None:
            return dt.isoformat()
    return default_departure(today).isoformat()


def to_iso_date(text: str, tz: str = "UTC") -> str:
    """Normalise an API-supplied date (ISO or natural text) to YYYY-MM-DD.

    Returns "" when the text cannot be read as a date.
    """
    if not text:
        return ""
    raw = text.strip()
    m = re.fullmatch(r"(\d{4})-(\d{1,2})-(\d{1,2})", raw)
    if m:
        dt = _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        return dt.isoformat() if dt else ""

    base_date = get_current_datetime(tz).replace(tzinfo=None)
    parsed = dateparser.parse(
        raw,
        settings={"RELATIVE_BASE": base_date, "PREFER_DATES_FROM": "future"},
    )
    if parsed:
        return parsed.date().isoformat()
    return ""


def duration_to_minutes(duration: str) -> int:
    """Total minutes for "5h 30m", "PT5H30M", "45m" style durations."""
    if not duration:
        return 0
    t = duration.strip().upper()
    if t.startswith("PT"):
        t = t[2:]
    hours = re.search(r"(\d+)\s*H", t)
    minutes = re.search(r"(\d+)\s*M", t)
    total = 0
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return total


def format_duration_minutes(total_minutes: int) -> str:
    """
    Convert duration in minutes to a compact human string, e.g. 85 -> "1h 25m".
    """
    if total_minutes is None or total_minutes < 0:
        return ""
    h = total_minutes // 60
    m = total_minutes % 60
    if h and m:
        return f"{h}h {m}m"
    if h:
        return f"{h}h"
    return f"{m}m"
