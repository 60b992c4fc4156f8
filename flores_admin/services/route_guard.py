"""라우트 가드 — 세션과 역할에 따라 이동을 허용하거나 리다이렉트.

Route Guard — Decides, for one navigation attempt, whether the protected
view renders or where the user is sent instead.

Guard Flow:
    1. 세션 없음 → UNAUTHENTICATED, /login?next=<요청 경로> 로 이동
       (No session: go to login, remembering the requested location)
    2. 세션은 있으나 역할이 허용 목록에 없음 → WRONG_ROLE, 역할별 홈으로 이동
       (Wrong role: go to that role's home view, silently)
    3. 둘 다 충족 → AUTHORIZED, 보호된 뷰 렌더링
       (Authorized: render the view)

평가는 매 요청마다 다시 수행되며 캐시하지 않습니다.
Evaluated on every navigation; nothing is cached across routes.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from flores_admin.schemas.auth import Role, Session

LOGIN_PATH: str = "/login"


class GuardState(str, Enum):
    """라우트 가드 관측 상태."""

    UNAUTHENTICATED = "unauthenticated"
    WRONG_ROLE = "authenticated-wrong-role"
    AUTHORIZED = "authenticated-authorized"


@dataclass(frozen=True)
class GuardDecision:
    """가드 판정 결과.

    Attributes:
        state: 판정 상태 (Observed state)
        redirect_to: 이동할 경로, 허용 시 None (Redirect target, None when authorized)
    """

    state: GuardState
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.AUTHORIZED


def login_location(requested_path: str | None) -> str:
    """로그인 경로 — 원래 요청한 위치를 next 로 기억."""
    if not requested_path or requested_path.startswith(LOGIN_PATH):
        return LOGIN_PATH
    return f"{LOGIN_PATH}?{urlencode({'next': requested_path})}"


def evaluate(
    allowed_roles: Iterable[Role],
    session: Session | None,
    requested_path: str | None = None,
) -> GuardDecision:
    """한 번의 이동 시도에 대한 가드 판정.

    Args:
        allowed_roles: 대상 뷰가 허용하는 역할 (Roles permitted for the view)
        session: 현재 세션 (Current session, or None)
        requested_path: 요청 경로 — 로그인 후 복귀용 (Requested path, remembered for login)

    Returns:
        GuardDecision: 판정 결과 (The decision)
    """
    if session is None:
        return GuardDecision(GuardState.UNAUTHENTICATED, login_location(requested_path))

    roles = set(allowed_roles)
    if session.role not in roles:
        return GuardDecision(GuardState.WRONG_ROLE, session.role.home_path)

    return GuardDecision(GuardState.AUTHORIZED)
