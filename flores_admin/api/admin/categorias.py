"""관리자 카테고리 라우터 — 조회와 생성.

Admin Category Router. Categories can only be listed and created.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form

from flores_admin.api.deps import admin_workspace
from flores_admin.api.views import compact, list_view
from flores_admin.schemas.category import Category
from flores_admin.services.workspace import Workspace

router: APIRouter = APIRouter()


@router.get("")
async def list_categories(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    floristeria: str | None = None,
    refresh: bool = False,
) -> dict:
    return await list_view(workspace.categories, floristeria, refresh=refresh)


@router.post("", response_model=Category, status_code=201)
async def create_category(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    floristeria: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    icono: Annotated[str | None, Form()] = None,
) -> Category:
    """카테고리를 생성합니다. 꽃집 선택 필수.

    Create a category for a store. Description and icon have defaults.
    """
    data = compact(nombre=nombre, floristeria=floristeria, descripcion=descripcion, icono=icono)
    return await workspace.categories.create(data)
