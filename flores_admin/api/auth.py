"""공통 인증 라우터 — 로그인, 로그아웃, 루트 리다이렉트.

Common Auth Router — Login, logout and the root redirect. Login and logout
answer with a 303 redirect; the session cookies travel on that response.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import RedirectResponse

from flores_admin.api.deps import get_session_store, get_workspaces
from flores_admin.schemas.auth import LoginRequest, LoginView
from flores_admin.services.auth_service import auth_service
from flores_admin.services.route_guard import LOGIN_PATH
from flores_admin.services.session_store import SessionStore
from flores_admin.services.workspace import WorkspaceRegistry
from flores_admin.utils.exceptions import FormValidationError

router: APIRouter = APIRouter()


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """루트 경로 → 로그인 화면."""
    return RedirectResponse(LOGIN_PATH, status_code=303)


@router.get(LOGIN_PATH, response_model=LoginView)
async def login_view(
    store: Annotated[SessionStore, Depends(get_session_store)],
    next_path: Annotated[str | None, Query(alias="next")] = None,
) -> LoginView:
    """로그인 화면 — 가드가 기억한 경로(next)와 현재 신원.

    Login view model. ``next`` is the location the guard remembered; after
    a successful login the console still goes to the role's home view.
    """
    session = store.current()
    return LoginView(next=next_path, identity=session.identity if session else None)


@router.post(LOGIN_PATH)
async def login(
    store: Annotated[SessionStore, Depends(get_session_store)],
    registry: Annotated[WorkspaceRegistry, Depends(get_workspaces)],
    username: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """로그인 — 성공 시 역할별 홈으로 303 리다이렉트.

    Log in against the backend. On success the session is stored and the
    browser is sent to the role's home view. On failure a 401 with the
    backend's message is returned and any existing session is kept.
    """
    fields: dict[str, str] = {}
    if not username or not username.strip():
        fields["username"] = "Enter your username"
    if not password:
        fields["password"] = "Enter your password"
    if fields:
        raise FormValidationError(fields)

    previous = store.current()
    async with registry.factory.create() as client:
        session = await auth_service.login(
            client, store, LoginRequest(username=username.strip(), password=password)
        )

    # 다른 세션으로 교체된 경우 이전 작업공간 정리 (Drop the replaced session's workspace)
    if previous is not None and previous.token != session.token:
        await registry.discard(previous.token)
    return RedirectResponse(session.role.home_path, status_code=303)


@router.post("/logout")
async def logout(
    store: Annotated[SessionStore, Depends(get_session_store)],
    registry: Annotated[WorkspaceRegistry, Depends(get_workspaces)],
) -> RedirectResponse:
    """로그아웃 — 세션 삭제 후 로그인 화면으로. 반복 호출해도 안전."""
    session = store.current()
    store.logout()
    if session is not None:
        await registry.discard(session.token)
    return RedirectResponse(LOGIN_PATH, status_code=303)
