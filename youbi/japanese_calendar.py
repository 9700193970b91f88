from __future__ import annotations

from typing import Optional, Union

from .results import EraDate, ParseFailure
from .text_cleaner import DELIMITER, is_ascii_number

ERA_NAME = "令和"
# 令和元年 is 2019.
ERA_OFFSET = 2018
ERA_TOKENS = (ERA_NAME, "R", "r")
FIRST_YEAR_MARK = "元"


def era_to_gregorian(era_year: int) -> int:
    return ERA_OFFSET + era_year


def _strip_era_token(text: str) -> Optional[str]:
    for token in ERA_TOKENS:
        if text.startswith(token):
            return text[len(token) :]
    return None


def _parse_era_year(raw: str) -> Optional[int]:
    if raw == FIRST_YEAR_MARK:
        return 1
    if is_ascii_number(raw):
        return int(raw)
    return None


def resolve_era(text: str) -> Union[str, EraDate, ParseFailure]:
    """Convert a ``令和Y/M/D`` string into an absolute-year triple.

    Strings without a leading era token are returned unchanged. Once the token
    is seen the remainder must be exactly three numeric fields; anything else
    is a failure rather than a fall-through to the generic rules.
    """
    remainder = _strip_era_token(text)
    if remainder is None:
        return text

    fields = remainder.split(DELIMITER)
    if len(fields) != 3:
        return ParseFailure(f"era date needs 3 fields, got {len(fields)}: {text!r}")

    raw_year, raw_month, raw_day = fields
    era_year = _parse_era_year(raw_year)
    if era_year is None or era_year < 1:
        return ParseFailure(f"invalid era year {raw_year!r}")
    if not is_ascii_number(raw_month):
        return ParseFailure(f"invalid month {raw_month!r}")
    if not is_ascii_number(raw_day):
        return ParseFailure(f"invalid day {raw_day!r}")

    return EraDate(era_to_gregorian(era_year), int(raw_month), int(raw_day))
