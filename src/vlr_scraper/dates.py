"""Tolerant date/time parsing for vlr.gg pages.

Every page type renders dates in its own literal format. The format
tables below are tried in order and the first successful parse wins.
"""

from datetime import date, datetime, time

from vlr_scraper.exceptions import FieldParseError

# Match list day labels: "Sat, January 4, 2025", then "Sat, Jan 4, 2025"
MATCH_LIST_DATE_FORMATS = ("%a, %B %d, %Y", "%a, %b %d, %Y")

# Per-item clock time on match lists and history lists: "3:00 PM"
MATCH_TIME_FORMATS = ("%I:%M %p",)

# Player/team match history and transactions: "2025/01/04"
HISTORY_DATE_FORMATS = ("%Y/%m/%d",)

# data-utc-ts attribute on the match detail header: "2025-01-04 18:00:00"
MATCH_DETAIL_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S",)


def parse_first(text: str | None, formats: tuple[str, ...]) -> datetime | None:
    """Parse ``text`` with the first matching format, None if none match."""
    if not text:
        return None
    cleaned = " ".join(text.split())
    for fmt in formats:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
    return None


def parse_required(text: str | None, formats: tuple[str, ...], field: str) -> datetime:
    """Like parse_first, but a failed parse is a FieldParseError."""
    parsed = parse_first(text, formats)
    if parsed is None:
        raise FieldParseError(field, text or "")
    return parsed


def parse_date(text: str | None, formats: tuple[str, ...] = HISTORY_DATE_FORMATS) -> date | None:
    parsed = parse_first(text, formats)
    return parsed.date() if parsed else None


def parse_time(text: str | None, formats: tuple[str, ...] = MATCH_TIME_FORMATS) -> time | None:
    parsed = parse_first(text, formats)
    return parsed.time() if parsed else None


def combine(day: date | None, clock: time | None) -> datetime | None:
    """Join a date and a clock time; absent unless both are present."""
    if day is None or clock is None:
        return None
    return datetime.combine(day, clock)
