"""세션별 작업공간 — 토큰 하나당 클라이언트 하나와 리소스 컨트롤러 묶음.

Per-session workspaces. Each session token gets one reusable httpx client
and one controller per resource, so list caches and per-entity status
survive between requests of the same session.

The registry is bounded: when it is full the least recently used workspace
is evicted and closed. Logging out discards the session's workspace.
"""

from collections import OrderedDict

import httpx

from flores_admin.config import settings
from flores_admin.services.category_service import CategoryController
from flores_admin.services.product_service import ProductController
from flores_admin.services.resource_controller import ResourceController
from flores_admin.services.store_service import StoreController
from flores_admin.services.user_service import UserController
from flores_admin.utils.http_client import ClientFactory


class Workspace:
    """한 세션의 클라이언트와 컨트롤러.

    Attributes:
        token: 세션 토큰 (Session token the client is bound to)
        client: 인증된 클라이언트 (Authenticated client)
        stores / products / categories / users: 리소스 컨트롤러
    """

    def __init__(self, factory: ClientFactory, token: str) -> None:
        self.token: str = token
        self.client: httpx.AsyncClient = factory.create(token)
        self.stores: StoreController = StoreController(self.client)
        self.products: ProductController = ProductController(self.client)
        self.categories: CategoryController = CategoryController(self.client)
        self.users: UserController = UserController(self.client)

    @property
    def controllers(self) -> list[ResourceController]:
        return [self.stores, self.products, self.categories, self.users]

    @property
    def closed(self) -> bool:
        return self.client.is_closed

    async def close(self) -> None:
        """컨트롤러를 분리하고 클라이언트를 닫습니다."""
        for controller in self.controllers:
            controller.close()
        await self.client.aclose()


class WorkspaceRegistry:
    """토큰 → 작업공간 LRU 레지스트리.

    Attributes:
        factory: 클라이언트 팩토리 (Client factory for new workspaces)
        max_size: 최대 작업공간 수 (Upper bound on live workspaces)
    """

    def __init__(self, factory: ClientFactory, max_size: int = settings.MAX_WORKSPACES) -> None:
        self.factory: ClientFactory = factory
        self.max_size: int = max_size
        self._workspaces: OrderedDict[str, Workspace] = OrderedDict()

    def __len__(self) -> int:
        return len(self._workspaces)

    def __contains__(self, token: object) -> bool:
        return token in self._workspaces

    async def acquire(self, token: str) -> Workspace:
        """토큰의 작업공간을 반환하고, 없으면 새로 만듭니다."""
        workspace = self._workspaces.get(token)
        if workspace is not None and not workspace.closed:
            self._workspaces.move_to_end(token)
            return workspace

        workspace = Workspace(self.factory, token)
        self._workspaces[token] = workspace
        while len(self._workspaces) > self.max_size:
            _, evicted = self._workspaces.popitem(last=False)
            await evicted.close()
        return workspace

    async def discard(self, token: str) -> None:
        """로그아웃 — 작업공간을 제거하고 닫습니다. 없으면 아무것도 하지 않음."""
        workspace = self._workspaces.pop(token, None)
        if workspace is not None:
            await workspace.close()

    async def close_all(self) -> None:
        while self._workspaces:
            _, workspace = self._workspaces.popitem(last=False)
            await workspace.close()
