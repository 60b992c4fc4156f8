"""관리자 꽃집 라우터 — 꽃집 CRUD 화면.

Admin Store Router — Views for florist shop management. Create and update
take a multipart form; the ``logo`` file is optional.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from flores_admin.api.deps import admin_workspace
from flores_admin.api.views import compact, list_view, read_upload
from flores_admin.schemas.common import BulkDeleteRequest, MessageResponse
from flores_admin.schemas.store import Store
from flores_admin.services.workspace import Workspace

router: APIRouter = APIRouter()


@router.get("")
async def list_stores(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    refresh: bool = False,
) -> dict:
    """꽃집 목록 화면 (Store list view)."""
    return await list_view(workspace.stores, refresh=refresh)


@router.post("", response_model=Store, status_code=201)
async def create_store(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    url: Annotated[str | None, Form()] = None,
    logo: Annotated[UploadFile | None, File()] = None,
) -> Store:
    """새 꽃집을 생성합니다.

    Create a store. Validation runs before anything is sent.
    """
    data = compact(nombre=nombre, descripcion=descripcion, url=url, logo=await read_upload(logo))
    return await workspace.stores.create(data)


@router.post("/bulk-delete")
async def bulk_delete_stores(
    data: BulkDeleteRequest,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> dict:
    """선택한 꽃집 일괄 삭제 — "N of M deleted"."""
    result = await workspace.stores.bulk_remove(data.ids, confirm=data.confirm)
    return result.summary()


@router.get("/{store_id}", response_model=Store)
async def get_store(
    store_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> Store:
    """수정 화면 초기값 (Edit form prefill)."""
    return await workspace.stores.get_one(store_id)


@router.put("/{store_id}", response_model=Store)
async def update_store(
    store_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    url: Annotated[str | None, Form()] = None,
    logo: Annotated[UploadFile | None, File()] = None,
) -> Store:
    data = compact(nombre=nombre, descripcion=descripcion, url=url, logo=await read_upload(logo))
    return await workspace.stores.update(store_id, data)


@router.delete("/{store_id}", response_model=MessageResponse)
async def delete_store(
    store_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    confirm: bool = False,
) -> MessageResponse:
    """꽃집을 삭제합니다. ``?confirm=true`` 필요."""
    await workspace.stores.remove(store_id, confirm=confirm)
    return MessageResponse(message="Store deleted")
