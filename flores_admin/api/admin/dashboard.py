"""관리자 대시보드 라우터 — 메뉴 섹션.

Admin Dashboard Router — The landing view of the admin console: who is
logged in and the sections of the side menu.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from flores_admin.api.deps import require_admin
from flores_admin.schemas.auth import Session

router: APIRouter = APIRouter()

# 사이드 메뉴 — Side menu sections
ADMIN_SECTIONS: list[dict[str, str]] = [
    {"name": "Floristerías", "path": "/admin/floristerias"},
    {"name": "Arreglos", "path": "/admin/productos"},
    {"name": "Categorías", "path": "/admin/categorias"},
    {"name": "Usuarios", "path": "/admin/usuarios"},
]


@router.get("")
async def admin_home(
    session: Annotated[Session, Depends(require_admin)],
) -> dict:
    """관리자 홈 화면."""
    return {
        "identity": session.identity,
        "sections": ADMIN_SECTIONS,
        "message": "Select an option from the menu.",
    }
