"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Each class maps one failure category of the console to a status code, so
services and controllers can raise without knowing how the view renders it.

Usage:
    from flores_admin.utils.exceptions import NotFoundError, FormValidationError
    raise NotFoundError("Store not found")
    raise FormValidationError({"price": "Must be zero or greater"})
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 백엔드가 해당 리소스를 찾지 못했을 때.

    Raised when the backend answers 404 for a single resource, or when a
    store user asks for a product outside their store.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용."""

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 로그인 실패 시 사용.

    401 Unauthorized exception.
    Raised when the backend rejects the submitted credentials. The current
    session (if any) is left untouched.
    """

    def __init__(self, detail: str = "Login failed") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 리소스가 지원하지 않는 작업 등."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class FormValidationError(HTTPException):
    """422 예외 — 제출 전 폼 검증 실패.

    Client-side validation failure. Raised before any network call.

    Args:
        fields: 필드별 오류 메시지 (Field name -> error message)
        message: 폼 전체 메시지 (Form-level message)
    """

    def __init__(
        self,
        fields: dict[str, str],
        message: str = "Please fix the highlighted fields",
    ) -> None:
        self.fields: dict[str, str] = fields
        super().__init__(
            status_code=422,
            detail={"message": message, "fields": fields},
        )


class ConfirmationRequiredError(HTTPException):
    """428 예외 — 삭제 전 명시적 확인이 필요함.

    Destructive-action guard. Raised when a delete is attempted without
    explicit confirmation; nothing is sent to the backend.
    """

    def __init__(self, detail: str = "Deletion must be confirmed") -> None:
        super().__init__(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=detail)


class BackendError(HTTPException):
    """502 예외 — 백엔드가 오류 응답을 반환함.

    Raised when the backend answers with a 4xx/5xx status (other than a
    404 on a single resource). The upstream status is kept for callers that
    want to branch on it.

    Args:
        detail: 배너에 표시할 메시지 (Banner message)
        upstream_status: 백엔드 응답 코드 (Status code returned by the backend)
    """

    def __init__(self, detail: str = "The server returned an error", upstream_status: int | None = None) -> None:
        self.upstream_status: int | None = upstream_status
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class BackendUnavailableError(HTTPException):
    """504 예외 — 타임아웃 또는 연결 실패."""

    def __init__(self, detail: str = "The server could not be reached") -> None:
        super().__init__(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=detail)


class RedirectRequired(Exception):
    """라우트 가드 리다이렉트 신호 — HTTP 오류가 아님.

    Raised by the route guard when navigation must go elsewhere. The
    application turns it into a 303 redirect with no error body.

    Args:
        location: 이동할 경로 (Target path)
    """

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location: str = location


def error_message(detail: Any) -> str:
    """HTTPException.detail 을 배너용 문자열로 변환합니다."""
    if isinstance(detail, dict):
        return str(detail.get("message", detail))
    return str(detail)
