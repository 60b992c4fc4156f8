"""스토어 사용자 카테고리 라우터 — 담당 꽃집의 카테고리."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form

from flores_admin.api.deps import assigned_store_id, store_user_workspace
from flores_admin.api.views import compact, list_view
from flores_admin.schemas.category import Category
from flores_admin.services.workspace import Workspace

router: APIRouter = APIRouter()


@router.get("")
async def list_my_categories(
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
    refresh: bool = False,
) -> dict:
    return await list_view(workspace.categories, store_id, refresh=refresh)


@router.post("", response_model=Category, status_code=201)
async def create_my_category(
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    icono: Annotated[str | None, Form()] = None,
) -> Category:
    """담당 꽃집에 카테고리를 생성합니다."""
    data = compact(nombre=nombre, floristeria=store_id, descripcion=descripcion, icono=icono)
    return await workspace.categories.create(data)
