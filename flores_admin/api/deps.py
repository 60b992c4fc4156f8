"""FastAPI 의존성 주입 모듈 — 세션 및 라우트 가드.

FastAPI dependency injection module — Session access and route guarding.
Provides reusable dependencies for reading the cookie-backed session,
enforcing role-based navigation, and reaching the per-session workspace.

Guard Flow (require_roles):
    1. 요청 쿠키에서 SessionStore 를 구성 (요청당 한 번)
       (SessionStore is built from the request cookies, once per request)
    2. evaluate() 가 허용 역할과 현재 세션을 비교
       (evaluate compares the allowed roles with the current session)
    3. 허용되지 않으면 RedirectRequired 발생 → 303 리다이렉트
       (Not allowed: RedirectRequired, rendered as a 303 redirect)
    4. 허용되면 Session 반환 (Allowed: the Session is returned)
"""

from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request

from flores_admin.schemas.auth import Role, Session
from flores_admin.services.route_guard import evaluate
from flores_admin.services.session_store import CookieStorage, SessionStore
from flores_admin.services.workspace import Workspace, WorkspaceRegistry
from flores_admin.utils.exceptions import ForbiddenError, RedirectRequired


def get_session_store(request: Request) -> SessionStore:
    """요청 쿠키 기반 SessionStore — 같은 요청 안에서는 재사용.

    The store is cached on ``request.state`` so the session cookie
    middleware can apply its pending writes to the outgoing response.
    """
    store: SessionStore | None = getattr(request.state, "session_store", None)
    if store is None:
        store = SessionStore(CookieStorage(request.cookies))
        request.state.session_store = store
    return store


def get_workspaces(request: Request) -> WorkspaceRegistry:
    return request.app.state.workspaces


def requested_location(request: Request) -> str:
    """쿼리 문자열을 포함한 요청 경로 (Requested path including the query)."""
    location = request.url.path
    if request.url.query:
        location = f"{location}?{request.url.query}"
    return location


def require_roles(*roles: Role) -> Callable[..., Session]:
    """역할 기반 라우트 가드 의존성 팩토리.

    Dependency factory guarding a view by role. Re-evaluated on every
    request; nothing is cached across routes.

    Args:
        *roles: 허용되는 역할 (Roles permitted for the view)

    Returns:
        FastAPI 의존성 함수 — Session 반환 또는 RedirectRequired 발생
        (Dependency returning the Session, or raising RedirectRequired)
    """
    def _check(
        request: Request,
        store: Annotated[SessionStore, Depends(get_session_store)],
    ) -> Session:
        session = store.current()
        decision = evaluate(roles, session, requested_location(request))
        if not decision.allowed or session is None:
            raise RedirectRequired(decision.redirect_to or "/login")
        return session
    return _check


# 편의 의존성 — Pre-configured guards for the two consoles
require_admin = require_roles(Role.ADMIN)
require_store_user = require_roles(Role.STORE_USER)


def workspace_for(guard: Callable[..., Session]) -> Callable[..., Awaitable[Workspace]]:
    """가드를 통과한 세션의 작업공간 의존성을 만듭니다."""
    async def _workspace(
        session: Annotated[Session, Depends(guard)],
        registry: Annotated[WorkspaceRegistry, Depends(get_workspaces)],
    ) -> Workspace:
        return await registry.acquire(session.token)
    return _workspace


admin_workspace = workspace_for(require_admin)
store_user_workspace = workspace_for(require_store_user)


def assigned_store_id(session: Annotated[Session, Depends(require_store_user)]) -> str:
    """스토어 사용자의 담당 꽃집 ID.

    Raises:
        ForbiddenError(403): 꽃집이 지정되지 않은 계정 (Account without a store)
    """
    store_id = session.identity.assigned_store_id
    if not store_id:
        raise ForbiddenError("Your account is not assigned to a store")
    return store_id
