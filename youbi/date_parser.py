from __future__ import annotations

import logging
from calendar import isleap, monthrange
from datetime import MAXYEAR, date
from typing import List, Optional, Union

from .japanese_calendar import resolve_era
from .results import EraDate, ParseFailure, WeekdayResult
from .text_cleaner import DELIMITER, has_month_marker, is_ascii_number, normalise_date_text
from .weekday import DEFAULT_LOCALE, SUPPORTED_LOCALES, weekday_label

logger = logging.getLogger("youbi.date_parser")

COMPACT_DATE_LENGTH = 8


def is_leap_year(year: int) -> bool:
    return isleap(year)


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def complete_year(text: str, current_year: int, had_month_marker: bool) -> str:
    """Prepend ``current_year`` to a bare ``M/D`` that came from ``M月D日``.

    Two-field strings typed with a plain delimiter (``6/6``) and digit blobs
    are left alone; :func:`build_date` decides what they mean.
    """
    if had_month_marker and len(text.split(DELIMITER)) == 2:
        return f"{current_year}{DELIMITER}{text}"
    return text


def _validated_date(year: int, month: int, day: int) -> Union[date, ParseFailure]:
    if not 1 <= year <= MAXYEAR:
        return ParseFailure(f"year out of range: {year}")
    if not 1 <= month <= 12:
        return ParseFailure(f"month out of range: {month}")
    last_day = days_in_month(year, month)
    if not 1 <= day <= last_day:
        return ParseFailure(f"day out of range: {year}/{month}/{day} (last day {last_day})")
    return date(year, month, day)


def _split_fields(text: str) -> Optional[List[str]]:
    if DELIMITER not in text:
        if len(text) == COMPACT_DATE_LENGTH and is_ascii_number(text):
            return [text[:4], text[4:6], text[6:]]
        return None
    fields = text.split(DELIMITER)
    if not all(is_ascii_number(field) for field in fields):
        return None
    return fields


def build_date(
    value: Union[str, EraDate],
    current_year: Optional[int] = None,
) -> Union[date, ParseFailure]:
    """Validate a normalised string or an era triple and build the date.

    String rules, first match wins:

    1. ``Y/M/D`` or compact ``YYYYMMDD`` (4+2+2 digits).
    2. ``M/D`` in ``current_year``. Month/day always takes precedence over
       year/month, so ``2025/6`` is rejected rather than read as June 2025.
    """
    if isinstance(value, EraDate):
        return _validated_date(value.year, value.month, value.day)

    fields = _split_fields(value)
    if fields is None:
        return ParseFailure(f"not a numeric date: {value!r}")

    if len(fields) == 3:
        year, month, day = (int(field) for field in fields)
        return _validated_date(year, month, day)

    if len(fields) == 2:
        if current_year is None:
            return ParseFailure(f"month/day without a current year: {value!r}")
        month, day = (int(field) for field in fields)
        return _validated_date(current_year, month, day)

    return ParseFailure(f"unexpected field count {len(fields)}: {value!r}")


def parse_date(raw: str, current_year: int) -> Union[date, ParseFailure]:
    """Run the parsing stages on ``raw`` without formatting the weekday."""
    normalised = normalise_date_text(raw)
    if not normalised:
        return ParseFailure("empty input")

    resolved = resolve_era(normalised)
    if isinstance(resolved, ParseFailure):
        return resolved
    if isinstance(resolved, EraDate):
        return build_date(resolved)

    completed = complete_year(resolved, current_year, has_month_marker(raw))
    return build_date(completed, current_year=current_year)


def parse_and_format(raw: str, current_year: int, locale: str = DEFAULT_LOCALE) -> WeekdayResult:
    if raw is None or not raw.strip():
        return WeekdayResult.empty()

    if locale not in SUPPORTED_LOCALES:
        logger.warning("Unsupported locale %r, falling back to %s.", locale, DEFAULT_LOCALE)
        locale = DEFAULT_LOCALE

    parsed = parse_date(raw, current_year)
    if isinstance(parsed, ParseFailure):
        logger.debug("Rejected date input %r: %s", raw, parsed.reason)
        return WeekdayResult.invalid()

    return WeekdayResult.ok(weekday_label(parsed, locale), parsed)
