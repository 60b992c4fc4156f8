"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

# .env 파일 절대 경로 — CWD와 무관하게 항상 프로젝트 루트의 .env를 참조
# Absolute path to .env file — ensures correct loading regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"

# 백엔드 기본 주소 — VITE_API_URL 미설정 시 사용 (Fallback when no API URL is configured)
DEFAULT_API_URL: str = "https://flores-backend-px2c.onrender.com/api"


class Settings(BaseSettings):
    """관리 콘솔 전역 설정 — 환경 변수 기반 구성.

    Global console settings loaded from environment variables.

    Attributes:
        API_URL: 백엔드 REST API 기본 주소 (Backend REST API base URL)
        HTTP_TIMEOUT_SECONDS: 백엔드 요청 타임아웃 (Backend request timeout)
        MAX_IMAGE_BYTES: 업로드 이미지 최대 크기 (Max image upload size in bytes)
        LIST_CACHE_TTL_SECONDS: 목록 재사용 허용 시간 (How long a fetched list may be reused)
        RECONCILE_DELAY_SECONDS: 삭제 후 목록 재조회 지연 (Delay before post-delete list refresh)
        SLOW_OPERATION_MS: 로딩 표시 기준 시간 (Threshold after which an operation shows a spinner)
        MAX_WORKSPACES: 세션별 작업공간 최대 개수 (Max live per-session workspaces)
        MAX_SETTLED_STATUSES: 보관할 완료 상태 최대 개수 (Settled statuses kept per controller until consumed)
        SESSION_TOKEN_KEY: 토큰 쿠키 이름 (Cookie key holding the credential token)
        SESSION_USER_KEY: 사용자 쿠키 이름 (Cookie key holding the signed identity)
        SECRET_KEY: 신원 쿠키 서명 키 (HS256 key signing the identity cookie)
    """

    APP_NAME: str = "Flores Admin Console"
    DEBUG: bool = False

    # 백엔드 연결 — 기존 프론트엔드의 VITE_API_URL 도 인식 (Also honours the old VITE_API_URL)
    API_URL: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("API_URL", "VITE_API_URL"),
    )
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # 이미지 업로드 제한 — 5MB
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    # 컨트롤러 동작 — Resource controller behaviour
    LIST_CACHE_TTL_SECONDS: float = 15.0
    RECONCILE_DELAY_SECONDS: float = 1.0
    SLOW_OPERATION_MS: int = 300
    MAX_WORKSPACES: int = 128
    MAX_SETTLED_STATUSES: int = 100

    # 세션 쿠키 — 두 개의 고정 키 (Two fixed cookie keys)
    SESSION_TOKEN_KEY: str = "token"
    SESSION_USER_KEY: str = "user"
    SESSION_COOKIE_MAX_AGE_DAYS: int = 7
    SESSION_COOKIE_SECURE: bool = False  # 운영 환경(HTTPS)에서는 True 권장

    # 신원 쿠키 서명 — HS256 key for the signed identity cookie
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: List[str] = ["http://localhost:5174"]

    # Axiom 로깅 설정 — Axiom observability platform settings
    AXIOM_API_TOKEN: str = ""
    AXIOM_DATASET: str = ""

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }


# 전역 설정 싱글턴 인스턴스 — Global settings singleton instance
settings: Settings = Settings()
