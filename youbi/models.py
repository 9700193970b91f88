from __future__ import annotations

from datetime import date as CalendarDate
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from .results import ResultKind, WeekdayResult
from .weekday import SUPPORTED_LOCALES

MAX_TEXT_LENGTH = 200


def _check_locale(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    candidate = value.strip()
    if candidate not in SUPPORTED_LOCALES:
        raise ValueError(
            f"未対応のロケールです: {value} (指定可能: {', '.join(SUPPORTED_LOCALES)})"
        )
    return candidate


class WeekdayRequest(BaseModel):
    text: str = Field(
        ...,
        max_length=MAX_TEXT_LENGTH,
        description="曜日を判定する日付文字列 (例: 2025/6/6, 令和7年6月6日, ６月６日)",
    )
    locale: Optional[str] = Field(
        default=None,
        description="曜日ラベルのロケール。省略時は設定値を使用",
    )
    current_year: Optional[int] = Field(
        default=None,
        ge=1,
        le=9999,
        description="年が省略された入力に補う年。省略時はサーバー時刻の年",
    )

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: Optional[str]) -> Optional[str]:
        return _check_locale(value)


class WeekdayBatchRequest(BaseModel):
    texts: List[str] = Field(..., description="判定する日付文字列の一覧。入力順に処理される")
    locale: Optional[str] = Field(default=None)
    current_year: Optional[int] = Field(default=None, ge=1, le=9999)

    @field_validator("texts")
    @classmethod
    def limit_text_length(cls, value: List[str]) -> List[str]:
        for text in value:
            if len(text) > MAX_TEXT_LENGTH:
                raise ValueError(f"日付文字列は{MAX_TEXT_LENGTH}文字以内で指定してください。")
        return value

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: Optional[str]) -> Optional[str]:
        return _check_locale(value)


class WeekdayResponse(BaseModel):
    """Result of a single weekday lookup as returned to HTTP clients."""

    text: str
    kind: ResultKind
    weekday: Optional[str] = None
    date: Optional[CalendarDate] = Field(
        default=None,
        description="Resolved calendar date when kind is 'ok'",
    )
    display_text: str = Field(..., description="Text a client should show for this input")

    @classmethod
    def from_result(
        cls, text: str, result: WeekdayResult, invalid_label: str, **extra: Any
    ) -> "WeekdayResponse":
        return cls(
            text=text,
            kind=result.kind,
            weekday=result.weekday,
            date=result.date,
            display_text=result.display_text(invalid_label),
            **extra,
        )


class WeekdayLookupResponse(WeekdayResponse):
    locale: str
    current_year: int


class WeekdayBatchResponse(BaseModel):
    locale: str
    current_year: int
    results: List[WeekdayResponse]
    total: int
    total_valid: int
    generated_at: datetime
