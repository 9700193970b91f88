from __future__ import annotations

from dataclasses import dataclass
from datetime import date as CalendarDate
from typing import Any, Dict, Literal, Optional

ResultKind = Literal["empty", "ok", "invalid"]

DEFAULT_INVALID_LABEL = "無効な日付"


@dataclass(frozen=True)
class ParseFailure:
    """Marks a string that could not be resolved to a date.

    ``reason`` is kept for logs and tests only; callers of the public
    operation never see it.
    """

    reason: str


@dataclass(frozen=True)
class EraDate:
    """Year/month/day triple produced by the era resolver, not yet validated."""

    year: int
    month: int
    day: int


@dataclass(frozen=True)
class WeekdayResult:
    kind: ResultKind
    weekday: Optional[str] = None
    date: Optional[CalendarDate] = None

    @classmethod
    def empty(cls) -> "WeekdayResult":
        return cls(kind="empty")

    @classmethod
    def invalid(cls) -> "WeekdayResult":
        return cls(kind="invalid")

    @classmethod
    def ok(cls, weekday: str, value: CalendarDate) -> "WeekdayResult":
        return cls(kind="ok", weekday=weekday, date=value)

    def as_dict(self) -> Dict[str, Any]:
        if self.kind == "ok":
            return {"kind": self.kind, "weekday": self.weekday}
        return {"kind": self.kind}

    def display_text(self, invalid_label: str = DEFAULT_INVALID_LABEL) -> str:
        if self.kind == "ok":
            return self.weekday or ""
        if self.kind == "invalid":
            return invalid_label
        return ""
