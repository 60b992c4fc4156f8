"""작업공간 레지스트리 테스트 — 세션별 재사용, LRU 제거, 종료."""

from flores_admin.services.workspace import WorkspaceRegistry
from flores_admin.utils.http_client import ClientFactory


class TestWorkspaceRegistry:
    async def test_same_token_reuses_workspace(self, factory: ClientFactory):
        registry = WorkspaceRegistry(factory)
        first = await registry.acquire("tok-a")
        assert await registry.acquire("tok-a") is first
        await registry.close_all()

    async def test_least_recently_used_evicted(self, factory: ClientFactory):
        """최대 개수 초과 — 가장 오래 쓰지 않은 작업공간 제거 및 종료."""
        registry = WorkspaceRegistry(factory, max_size=2)
        a = await registry.acquire("tok-a")
        await registry.acquire("tok-b")
        await registry.acquire("tok-a")
        await registry.acquire("tok-c")

        assert "tok-b" not in registry
        assert "tok-a" in registry
        assert len(registry) == 2
        assert not a.closed
        await registry.close_all()

    async def test_discard_closes_client_and_controllers(self, factory: ClientFactory):
        registry = WorkspaceRegistry(factory)
        workspace = await registry.acquire("tok-a")
        await registry.discard("tok-a")
        await registry.discard("tok-a")

        assert workspace.closed
        assert all(controller.closed for controller in workspace.controllers)
        assert "tok-a" not in registry
