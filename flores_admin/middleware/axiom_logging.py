"""Axiom 콘솔 요청 로깅 미들웨어.

Console request logging to Axiom. One structured event per view request:
method, path, status, duration, session role, redirect target, masked
params/body and the error reason of failed views. Multipart bodies (image
uploads) are reduced to their size.
"""

import json
import re
import time
from typing import Any
from urllib.parse import parse_qsl

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from flores_admin.config import settings

# 마스킹 대상 키 — Keys whose values never reach the log
_MASKED_KEY = re.compile(
    r"(password|passwd|secret|token|authorization|cookie|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅하지 않는 경로 — Liveness and API docs
_UNLOGGED_PATHS: frozenset[str] = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})

_BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def _masked(value: Any, depth: int = 0) -> Any:
    """민감 키 마스킹 (dict/list 재귀, 깊이·길이 제한)."""
    if depth > 5:
        return "..."
    if isinstance(value, dict):
        return {
            key: "***" if _MASKED_KEY.search(str(key)) else _masked(item, depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_masked(item, depth + 1) for item in value[:20]]
    return value


def _clip(text: str, limit: int = 2000) -> str:
    return text if len(text) <= limit else f"{text[:limit]}...(truncated)"


async def _request_payload(request: Request) -> Any:
    """요청 본문 요약 — JSON/폼은 마스킹, 멀티파트는 크기만.

    Summarise the request body for the log. Returns None when there is
    nothing worth logging.
    """
    if request.method not in _BODY_METHODS:
        return None
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/"):
        return f"(multipart form, {request.headers.get('content-length', '?')} bytes)"

    raw = await request.body()
    if not raw:
        return None
    if content_type.startswith("application/x-www-form-urlencoded"):
        return _masked(dict(parse_qsl(raw.decode("utf-8", errors="replace"))))
    try:
        return _clip(json.dumps(_masked(json.loads(raw)), ensure_ascii=False))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(unparsed body)"


def _failure_reason(body: bytes) -> str:
    """오류 응답 본문에서 ``detail`` 추출."""
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]
    detail = parsed.get("detail", parsed) if isinstance(parsed, dict) else parsed
    return _clip(detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False), 500)


def _session_role(request: Request) -> str | None:
    """요청 중 읽힌 세션의 역할 (Role of the session, if one was read)."""
    store = getattr(request.state, "session_store", None)
    if store is None:
        return None
    session = store.current()
    return session.role.value if session is not None else None


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """콘솔 요청 로깅 미들웨어.

    Pass-through unless both ``AXIOM_API_TOKEN`` and ``AXIOM_DATASET`` are set.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._axiom: AxiomClient | None = (
            AxiomClient(token=settings.AXIOM_API_TOKEN)
            if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET
            else None
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._axiom is None or request.url.path in _UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path, "status_code": 500}
        if request.query_params:
            event["query_params"] = _masked(dict(request.query_params))
        payload = await _request_payload(request)
        if payload is not None:
            event["request_body"] = payload

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code
            if "location" in response.headers:
                event["redirect_to"] = response.headers["location"]
            if response.status_code >= 400:
                response = await self._with_reason(response, event)
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            role = _session_role(request)
            if role:
                event["role"] = role
            try:
                self._axiom.ingest_events(self._dataset, [event])
            except Exception:
                pass  # 로깅 실패는 요청에 영향 없음 — Never break a view on log failure

        return response

    @staticmethod
    async def _with_reason(response: Response, event: dict[str, Any]) -> Response:
        """오류 응답 본문을 읽어 사유를 기록하고, 같은 내용의 응답으로 다시 감쌉니다."""
        body = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
        event["error"] = _failure_reason(body)
        return Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
