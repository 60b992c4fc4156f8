"""관리자 콘솔 라우터 패키지 — 모든 관리자 화면 통합.

Admin console router package — Aggregates every admin view into a single
router served under ``/admin``. Every view is guarded by ``require_admin``.

Included routers:
    - dashboard: 관리자 홈 (Admin home and side menu)
    - floristerias: 꽃집 관리 (Store management)
    - productos: 상품 관리 (Product management)
    - categorias: 카테고리 관리 (Category management)
    - usuarios: 사용자 관리 (User management)
"""

from fastapi import APIRouter

from flores_admin.api.admin.categorias import router as categorias_router
from flores_admin.api.admin.dashboard import router as dashboard_router
from flores_admin.api.admin.floristerias import router as floristerias_router
from flores_admin.api.admin.productos import router as productos_router
from flores_admin.api.admin.usuarios import router as usuarios_router
from flores_admin.schemas.auth import Role

# 역할 홈 경로가 곧 라우터 접두사 (The role home doubles as the router prefix)
ADMIN_PREFIX: str = Role.ADMIN.home_path

admin_router: APIRouter = APIRouter()

admin_router.include_router(dashboard_router, prefix=ADMIN_PREFIX, tags=["Admin Dashboard"])
admin_router.include_router(floristerias_router, prefix=f"{ADMIN_PREFIX}/floristerias", tags=["Admin Stores"])
admin_router.include_router(productos_router, prefix=f"{ADMIN_PREFIX}/productos", tags=["Admin Products"])
admin_router.include_router(categorias_router, prefix=f"{ADMIN_PREFIX}/categorias", tags=["Admin Categories"])
admin_router.include_router(usuarios_router, prefix=f"{ADMIN_PREFIX}/usuarios", tags=["Admin Users"])
