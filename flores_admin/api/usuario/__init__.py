"""스토어 사용자 콘솔 라우터 패키지.

Store-user console router package — Aggregates the views of a ``usuario``
account, served under ``/usuario``. Every view is guarded by
``require_store_user`` and scoped to the account's assigned store.

Included routers:
    - dashboard: 홈 (Home with the assigned store)
    - productos: 내 꽃집 상품 (Products of my store)
    - categorias: 내 꽃집 카테고리 (Categories of my store)
"""

from fastapi import APIRouter

from flores_admin.api.usuario.categorias import router as categorias_router
from flores_admin.api.usuario.dashboard import router as dashboard_router
from flores_admin.api.usuario.productos import router as productos_router
from flores_admin.schemas.auth import Role

STORE_USER_PREFIX: str = Role.STORE_USER.home_path

usuario_router: APIRouter = APIRouter()

usuario_router.include_router(dashboard_router, prefix=STORE_USER_PREFIX, tags=["Store Home"])
usuario_router.include_router(productos_router, prefix=f"{STORE_USER_PREFIX}/productos", tags=["Store Products"])
usuario_router.include_router(categorias_router, prefix=f"{STORE_USER_PREFIX}/categorias", tags=["Store Categories"])
