from __future__ import annotations

import json
import logging
from typing import Annotated, List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .results import DEFAULT_INVALID_LABEL
from .weekday import DEFAULT_LOCALE, SUPPORTED_LOCALES


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="YOUBI_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_title: str = Field(default="Youbi API", description="FastAPI application title")
    app_description: str = Field(
        default="日付文字列から曜日を判定するためのAPI",
        description="OpenAPI 用の説明文",
    )
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="CORS で許可するオリジンの一覧",
    )
    log_level: str = Field(
        default="INFO",
        description="アプリケーションログのレベル (DEBUG/INFO/WARNING/ERROR/CRITICAL)",
    )
    enable_request_logging: bool = Field(
        default=True,
        description="各リクエストのログ出力を有効化",
    )
    default_locale: str = Field(
        default=DEFAULT_LOCALE,
        description="曜日ラベルの既定ロケール (ja / ja-short / en-long / en-short)",
    )
    invalid_label: str = Field(
        default=DEFAULT_INVALID_LABEL,
        description="日付として解釈できなかった入力に表示する文字列",
    )
    utc_offset_hours: int = Field(
        default=9,
        description="current_year 省略時に現在年を求めるためのUTCオフセット（既定は日本時間）",
        ge=-12,
        le=14,
    )
    max_batch_size: int = Field(
        default=1_000,
        description="一括判定で受け付ける最大件数",
        ge=1,
        le=10_000,
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Union[str, List[str]]) -> List[str]:
        if isinstance(value, str):
            raw = value.strip()
            if raw.startswith("["):
                # JSON 配列形式 (["https://a", "https://b"])
                return [str(origin).strip() for origin in json.loads(raw) if str(origin).strip()]
            return [origin.strip() for origin in raw.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        candidate = value.upper()
        if candidate not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            logging.getLogger("youbi.settings").warning(
                "Unknown log level '%s', falling back to INFO.", value
            )
            return "INFO"
        return candidate

    @field_validator("default_locale")
    @classmethod
    def _check_locale(cls, value: str) -> str:
        candidate = value.strip()
        if candidate not in SUPPORTED_LOCALES:
            logging.getLogger("youbi.settings").warning(
                "Unknown locale '%s', falling back to %s.", value, DEFAULT_LOCALE
            )
            return DEFAULT_LOCALE
        return candidate


settings = Settings()
