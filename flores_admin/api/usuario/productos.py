"""스토어 사용자 상품 라우터 — 담당 꽃집의 상품만.

Store-user Product Router. Every view is scoped to the assigned store:
the list reads ``/flores/floristeria/{store_id}``, new products are forced
into that store, and products of other stores read as not found.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from flores_admin.api.deps import assigned_store_id, store_user_workspace
from flores_admin.api.views import compact, list_view, read_upload
from flores_admin.schemas.common import BulkDeleteRequest, MessageResponse
from flores_admin.schemas.product import Product
from flores_admin.services.workspace import Workspace
from flores_admin.utils.exceptions import error_message

router: APIRouter = APIRouter()


@router.get("")
async def list_my_products(
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
    refresh: bool = False,
) -> dict:
    """내 꽃집 상품 목록 (Products of my store)."""
    return await list_view(workspace.products, store_id, refresh=refresh)


@router.get("/nuevo")
async def new_my_product_form(
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
) -> dict:
    categories = await list_view(workspace.categories, store_id)
    return {"store_id": store_id, "categories": categories["items"], "error": categories["error"]}


@router.post("", response_model=Product, status_code=201)
async def create_my_product(
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    precio: Annotated[str | None, Form()] = None,
    stock: Annotated[str | None, Form()] = None,
    categorias: Annotated[list[str] | None, Form()] = None,
    categoria: Annotated[str | None, Form()] = None,
    imagen: Annotated[UploadFile | None, File()] = None,
) -> Product:
    """내 꽃집에 상품을 생성합니다. 꽃집 필드는 담당 꽃집으로 고정."""
    data = compact(
        nombre=nombre,
        descripcion=descripcion,
        precio=precio,
        stock=stock,
        categorias=categorias,
        categoria=categoria,
        imagen=await read_upload(imagen),
    )
    return await workspace.products.create(workspace.products.scoped_form(data, store_id))


@router.post("/bulk-delete")
async def bulk_delete_my_products(
    data: BulkDeleteRequest,
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
) -> dict:
    """내 꽃집 상품 일괄 삭제 — 다른 꽃집 상품은 실패로 보고.

    Ownership is checked against the store's product list. When that list
    cannot be read, the last known list of the store is used and ids it
    does not contain fail with the list error.
    """
    unverified = "Product not found"
    try:
        await workspace.products.list(store_id)
    except HTTPException as exc:
        unverified = f"Could not verify the product: {error_message(exc.detail)}"
    own = {product.id for product in workspace.products.items_for(store_id)}
    foreign = [i for i in data.ids if i not in own]
    result = await workspace.products.bulk_remove(
        [i for i in data.ids if i in own], confirm=data.confirm
    )
    for product_id in foreign:
        result.failed[product_id] = unverified
    return result.summary()


@router.get("/{product_id}", response_model=Product)
async def get_my_product(
    product_id: str,
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
) -> Product:
    return await workspace.products.get_in_store(product_id, store_id)


@router.put("/{product_id}", response_model=Product)
async def update_my_product(
    product_id: str,
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
    nombre: Annotated[str | None, Form()] = None,
    descripcion: Annotated[str | None, Form()] = None,
    precio: Annotated[str | None, Form()] = None,
    stock: Annotated[str | None, Form()] = None,
    categorias: Annotated[list[str] | None, Form()] = None,
    categoria: Annotated[str | None, Form()] = None,
    imagen: Annotated[UploadFile | None, File()] = None,
) -> Product:
    await workspace.products.get_in_store(product_id, store_id)
    data = compact(
        nombre=nombre,
        descripcion=descripcion,
        precio=precio,
        stock=stock,
        categorias=categorias,
        categoria=categoria,
        imagen=await read_upload(imagen),
    )
    return await workspace.products.update(product_id, workspace.products.scoped_form(data, store_id))


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_my_product(
    product_id: str,
    store_id: Annotated[str, Depends(assigned_store_id)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
    confirm: bool = False,
) -> MessageResponse:
    await workspace.products.get_in_store(product_id, store_id)
    await workspace.products.remove(product_id, confirm=confirm)
    return MessageResponse(message="Product deleted")
