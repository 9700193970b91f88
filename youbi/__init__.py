from .date_parser import build_date, complete_year, parse_and_format, parse_date
from .japanese_calendar import resolve_era
from .results import EraDate, ParseFailure, WeekdayResult
from .text_cleaner import normalise_date_text
from .weekday import SUPPORTED_LOCALES, weekday_label

__all__ = [
    "EraDate",
    "ParseFailure",
    "SUPPORTED_LOCALES",
    "WeekdayResult",
    "build_date",
    "complete_year",
    "normalise_date_text",
    "parse_and_format",
    "parse_date",
    "resolve_era",
    "weekday_label",
]
