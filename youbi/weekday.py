from __future__ import annotations

from datetime import date
from typing import Dict, Tuple

# Index 0 is Sunday.
WEEKDAY_LABELS: Dict[str, Tuple[str, ...]] = {
    "ja": ("日曜日", "月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日"),
    "ja-short": ("日", "月", "火", "水", "木", "金", "土"),
    "en-long": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    "en-short": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
}
SUPPORTED_LOCALES: Tuple[str, ...] = tuple(WEEKDAY_LABELS)
DEFAULT_LOCALE = "ja"


def day_of_week(year: int, month: int, day: int) -> int:
    """Return 0 (Sunday) .. 6 (Saturday) using Zeller's congruence.

    January and February count as months 13 and 14 of the previous year.
    """
    if month < 3:
        month += 12
        year -= 1
    century, year_of_century = divmod(year, 100)
    h = (
        day
        + (13 * (month + 1)) // 5
        + year_of_century
        + year_of_century // 4
        + century // 4
        + 5 * century
    ) % 7
    # Zeller yields 0 = Saturday.
    return (h + 6) % 7


def weekday_label(value: date, locale: str = DEFAULT_LOCALE) -> str:
    labels = WEEKDAY_LABELS.get(locale)
    if labels is None:
        raise ValueError(f"Unsupported locale: {locale!r}")
    return labels[day_of_week(value.year, value.month, value.day)]
