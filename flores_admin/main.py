"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures session cookies, request logging, CORS, the guard redirect
handler, health check, and includes the console routers.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from flores_admin.config import settings
from flores_admin.middleware.axiom_logging import AxiomLoggingMiddleware
from flores_admin.middleware.session_cookies import SessionCookieMiddleware
from flores_admin.services.workspace import WorkspaceRegistry
from flores_admin.utils.exceptions import RedirectRequired
from flores_admin.utils.http_client import ClientFactory


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """종료 시 모든 세션 작업공간의 클라이언트를 닫습니다."""
    yield
    await app.state.workspaces.close_all()


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# 세션별 작업공간 레지스트리 — Per-session clients and controllers
app.state.workspaces = WorkspaceRegistry(ClientFactory.from_settings())

# 세션 쿠키 미들웨어 — 가장 안쪽에서 응답에 쿠키 기록
# (Innermost, so guard redirects and error responses carry cookie changes too)
app.add_middleware(SessionCookieMiddleware)

# Axiom API 로깅 미들웨어 — Axiom request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — 쿠키 세션이므로 허용 출처를 명시
# (Cookie sessions need explicit origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RedirectRequired)
async def redirect_required_handler(request: Request, exc: RedirectRequired) -> RedirectResponse:
    """라우트 가드 리다이렉트 — 오류 본문 없이 303."""
    return RedirectResponse(exc.location, status_code=303)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
# auth_router: /, /login, /logout
# admin_router: /admin/* (admin only)
# usuario_router: /usuario/* (store users only)
from flores_admin.api.auth import router as auth_router  # noqa: E402
from flores_admin.api.admin import admin_router  # noqa: E402
from flores_admin.api.usuario import usuario_router  # noqa: E402

app.include_router(auth_router, tags=["Auth"])
app.include_router(admin_router)
app.include_router(usuario_router)
