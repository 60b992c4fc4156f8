"""스토어 사용자 홈 라우터.

Store-user Home Router — Landing view of the store console, with the
assigned store when it can be read.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from flores_admin.api.deps import require_store_user, store_user_workspace
from flores_admin.schemas.auth import Session
from flores_admin.services.workspace import Workspace
from flores_admin.utils.exceptions import error_message

router: APIRouter = APIRouter()

USER_SECTIONS: list[dict[str, str]] = [
    {"name": "Mis Arreglos", "path": "/usuario/productos"},
    {"name": "Categorías", "path": "/usuario/categorias"},
]


@router.get("")
async def store_user_home(
    session: Annotated[Session, Depends(require_store_user)],
    workspace: Annotated[Workspace, Depends(store_user_workspace)],
) -> dict:
    """스토어 사용자 홈 — 담당 꽃집 정보 포함."""
    store_id = session.identity.assigned_store_id
    store = None
    error: str | None = None
    if store_id:
        try:
            store = await workspace.stores.get_one(store_id)
        except HTTPException as exc:
            error = error_message(exc.detail)
    else:
        error = "Your account is not assigned to a store"
    return {
        "identity": session.identity,
        "store": store,
        "sections": USER_SECTIONS,
        "error": error,
        "message": "Welcome, manage your arrangements.",
    }
