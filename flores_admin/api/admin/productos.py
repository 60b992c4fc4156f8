"""관리자 상품 라우터 — 상품(Arreglo) CRUD 화면.

Admin Product Router — Views for product management across every store.
The list can be narrowed to one store with ``?floristeria=<id>``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from flores_admin.api.deps import admin_workspace
from flores_admin.api.views import compact, list_view, read_upload
from flores_admin.schemas.common import BulkDeleteRequest, MessageResponse
from flores_admin.schemas.product import Product
from flores_admin.services.workspace import Workspace
from flores_admin.utils.exceptions import error_message

router: APIRouter = APIRouter()


@router.get("")
async def list_products(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    floristeria: str | None = None,
    refresh: bool = False,
) -> dict:
    """상품 목록 화면 — 꽃집 필터 선택 가능."""
    return await list_view(workspace.products, floristeria, refresh=refresh)


@router.get("/nuevo")
async def new_product_form(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    floristeria: str | None = None,
) -> dict:
    """상품 생성 화면 — 꽃집/카테고리 선택지 제공.

    Options for the create form: every store, and the categories of the
    chosen store (all categories when none is chosen).
    """
    stores = await list_view(workspace.stores)
    categories = await list_view(workspace.categories, floristeria)
    return {
        "stores": stores["items"],
        "categories": categories["items"],
        "error": stores["error"] or categories["error"],
    }


@router.post("", response_model=Product, status_code=201)
async def create_product(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    precio: Annotated[str | None, Form()] = None,
    stock: Annotated[str | None, Form()] = None,
    floristeria: Annotated[str | None, Form()] = None,
    categorias: Annotated[list[str] | None, Form()] = None,
    categoria: Annotated[str | None, Form()] = None,
    imagen: Annotated[UploadFile | None, File()] = None,
) -> Product:
    """새 상품을 생성합니다. 구버전 단일 ``categoria`` 도 허용."""
    data = compact(
        nombre=nombre,
        descripcion=descripcion,
        precio=precio,
        stock=stock,
        floristeria=floristeria,
        categorias=categorias,
        categoria=categoria,
        imagen=await read_upload(imagen),
    )
    return await workspace.products.create(data)


@router.post("/bulk-delete")
async def bulk_delete_products(
    data: BulkDeleteRequest,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> dict:
    result = await workspace.products.bulk_remove(data.ids, confirm=data.confirm)
    return result.summary()


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> dict:
    """수정 화면 — 상품과 해당 꽃집의 카테고리 선택지."""
    product = await workspace.products.get_one(product_id)
    categories_error: str | None = None
    try:
        categories = await workspace.categories.list(product.store_id)
    except HTTPException as exc:
        categories = workspace.categories.items_for(product.store_id)
        categories_error = error_message(exc.detail)
    return {"product": product, "categories": categories, "error": categories_error}


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    precio: Annotated[str | None, Form()] = None,
    stock: Annotated[str | None, Form()] = None,
    floristeria: Annotated[str | None, Form()] = None,
    categorias: Annotated[list[str] | None, Form()] = None,
    categoria: Annotated[str | None, Form()] = None,
    imagen: Annotated[UploadFile | None, File()] = None,
) -> Product:
    data = compact(
        nombre=nombre,
        descripcion=descripcion,
        precio=precio,
        stock=stock,
        floristeria=floristeria,
        categorias=categorias,
        categoria=categoria,
        imagen=await read_upload(imagen),
    )
    return await workspace.products.update(product_id, data)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    confirm: bool = False,
) -> MessageResponse:
    await workspace.products.remove(product_id, confirm=confirm)
    return MessageResponse(message="Product deleted")
