"""세션 쿠키 미들웨어.

Session cookie middleware. The session store buffers its writes on a
CookieStorage; this middleware applies them to whatever response leaves
the application, including redirects raised by the route guard.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from flores_admin.services.session_store import CookieStorage


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """요청 처리 중 변경된 세션 쿠키를 응답에 기록합니다."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        store = getattr(request.state, "session_store", None)
        if store is not None and isinstance(store.storage, CookieStorage) and store.storage.dirty:
            store.storage.apply(response)
        return response
