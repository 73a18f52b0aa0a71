"""요청/응답 로깅 미들웨어 — Axiom 전송 및 로컬 로거.

Request/response logging middleware.
Builds one structured event per API call (method, path, params, submitted
body, status, duration, error detail) and ships it to Axiom when a token and
dataset are configured. Every event is also written to the ``audit_report.http``
logger, so local runs and tests see the same trail without Axiom.

Sensitive keys (token, secret, authorization) are masked before logging.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from audit_report.config import settings
from audit_report.utils.logging_utils import get_logger

logger = get_logger("http")

_SENSITIVE_KEYS = re.compile(r"(secret|token|authorization|api_key|apikey|credential)", re.IGNORECASE)

# 로깅 제외 경로 — health probes and docs
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 오류 본문을 읽을 응답 유형 (Error bodies worth reading)
_ERROR_MEDIA_TYPES = ("application/json", "text/plain")


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드를 재귀적으로 마스킹합니다. 목록은 앞 20개만."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _shorten(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "...(truncated)"


def _error_detail(body: bytes) -> str:
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _shorten(body.decode("utf-8", errors="replace"), 500)
    detail = payload.get("detail", payload) if isinstance(payload, dict) else payload
    # 검증 오류는 메시지 목록 — 422 detail is a list of messages
    if isinstance(detail, list):
        detail = "; ".join(str(item) for item in detail)
    return _shorten(str(detail), 500)


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 기록하는 미들웨어.

    Logs every API request and response; errors carry the response detail
    (validation messages, conflict text, store diagnostic).
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET
        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path, "status_code": 500}
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))

        if request.method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    event["request_body"] = mask_sensitive(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    event["request_body"] = "(non-json body)"

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code
            if response.status_code >= 400 and response.headers.get("content-type", "").startswith(_ERROR_MEDIA_TYPES):
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = _error_detail(body)
                # 소비한 본문으로 응답 재구성 — rebuild the consumed response
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._emit(event)

        return response

    def _emit(self, event: dict[str, Any]) -> None:
        if event["status_code"] >= 500:
            logger.error("%s %s -> %s %s", event["method"], event["path"], event["status_code"], event.get("error", ""))
        elif event["status_code"] >= 400:
            logger.info("%s %s -> %s %s", event["method"], event["path"], event["status_code"], event.get("error", ""))
        else:
            logger.debug("%s %s -> %s (%sms)", event["method"], event["path"], event["status_code"], event["duration_ms"])

        if self._client is None:
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:  # Axiom 장애가 요청 처리를 막지 않도록
            logger.warning("Axiom ingest failed: %s", exc)
