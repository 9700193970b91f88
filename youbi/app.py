from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .date_parser import parse_and_format
from .models import (
    WeekdayBatchRequest,
    WeekdayBatchResponse,
    WeekdayLookupResponse,
    WeekdayRequest,
    WeekdayResponse,
)
from .settings import settings

LOG_LEVEL = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("youbi.app")
logger.setLevel(LOG_LEVEL)

ALLOWED_ORIGINS = settings.allowed_origins or ["*"]


app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _uptime_seconds() -> float:
    started_at = getattr(app.state, "started_at", None)
    if not started_at:
        return 0.0
    return max(0.0, (datetime.now(timezone.utc) - started_at).total_seconds())


def current_year() -> int:
    """Year on the local wall clock, as the host would see it."""
    local_zone = timezone(timedelta(hours=settings.utc_offset_hours))
    return datetime.now(local_zone).year


def _resolve_context(locale: Optional[str], year: Optional[int]) -> tuple[str, int]:
    return locale or settings.default_locale, year if year is not None else current_year()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    if settings.enable_request_logging:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", str(uuid4()))
    logger.exception(
        "Unhandled server error",
        extra={"request_id": request_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "サーバー内部で予期しないエラーが発生しました。",
            "request_id": request_id,
        },
        headers={"X-Request-ID": request_id},
    )


@app.on_event("startup")
async def startup() -> None:
    app.state.started_at = datetime.now(timezone.utc)
    app.state.settings = settings


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "uptime_seconds": round(_uptime_seconds(), 3),
        "version": app.version,
    }


@app.get("/health/live")
async def health_live() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


@app.get("/health/ready")
async def health_ready() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


@app.post("/api/weekday", response_model=WeekdayLookupResponse)
async def lookup_weekday(request: WeekdayRequest) -> WeekdayLookupResponse:
    locale, year = _resolve_context(request.locale, request.current_year)
    result = parse_and_format(request.text, year, locale)
    return WeekdayLookupResponse.from_result(
        request.text,
        result,
        settings.invalid_label,
        locale=locale,
        current_year=year,
    )


@app.post("/api/weekday/batch", response_model=WeekdayBatchResponse)
async def lookup_weekday_batch(request: WeekdayBatchRequest) -> WeekdayBatchResponse:
    if len(request.texts) > settings.max_batch_size:
        raise HTTPException(
            status_code=422,
            detail=f"一度に判定できるのは最大{settings.max_batch_size}件です。",
        )

    locale, year = _resolve_context(request.locale, request.current_year)
    # 入力順に1件ずつ評価する
    results = [
        WeekdayResponse.from_result(text, parse_and_format(text, year, locale), settings.invalid_label)
        for text in request.texts
    ]

    return WeekdayBatchResponse(
        locale=locale,
        current_year=year,
        results=results,
        total=len(results),
        total_valid=sum(1 for item in results if item.kind == "ok"),
        generated_at=datetime.now(timezone.utc),
    )
