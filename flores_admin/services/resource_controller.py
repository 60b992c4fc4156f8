"""리소스 CRUD 컨트롤러 — 모든 리소스 뷰가 공유하는 목록/상세/생성/수정/삭제 흐름.

Resource CRUD Controller — The list/detail/create/update/delete flow shared
by every resource view (stores, products, categories, users).

Controller Flow:
    1. list()     — 인증된 GET, 신선한 캐시가 있으면 재사용
                    (Authenticated GET; a fresh cached list is reused)
    2. create()/update() — 폼 검증 후에만 네트워크 호출
                    (Form is validated before any network call)
    3. remove()   — 명시적 확인 필요, 성공 시 로컬 목록에서 제거 후 재조회 예약
                    (Requires confirmation; on success the item leaves the
                    local list and a reconcile refresh is scheduled)
    4. bulk_remove() — 동시 삭제, 부분 실패는 집계로 보고
                    (Concurrent deletes; partial failure is reported, not raised)

State:
    작업 상태는 키(엔티티 ID 또는 "list"/"create")별로 추적됩니다.
    Operation state is tracked per key: idle → loading → success|error.
    모든 변경 작업은 캐시된 목록을 무효화합니다.
    Every mutation invalidates the cached list.

close() 이후 도착한 결과는 상태를 건드리지 않고 버려집니다.
Results arriving after close() are dropped without touching state.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar

import httpx
from fastapi import HTTPException
from pydantic import ValidationError

from flores_admin.config import settings
from flores_admin.repositories.base import ResourceRepository
from flores_admin.schemas.common import (
    BackendRecord,
    BulkDeleteResult,
    FormModel,
    OperationState,
    OperationStatus,
)
from flores_admin.utils.exceptions import (
    BadRequestError,
    ConfirmationRequiredError,
    FormValidationError,
    error_message,
)

EntityT = TypeVar("EntityT", bound=BackendRecord)
FormT = TypeVar("FormT", bound=FormModel)

# 엔티티가 없는 작업의 추적 키 (Status keys for operations with no entity)
LIST_KEY: str = "list"
CREATE_KEY: str = "create"

ALL_OPERATIONS: frozenset[str] = frozenset({"list", "get", "create", "update", "delete"})

_VALUE_ERROR_PREFIX: str = "Value error, "


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Pydantic 검증 오류 → 필드별 첫 번째 메시지.

    Collapse a ValidationError into one message per top-level field. Errors
    without a location are reported under ``"__all__"``.
    """
    fields: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else "__all__"
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        fields.setdefault(key, message)
    return fields


class ResourceController(Generic[EntityT, FormT]):
    """제네릭 리소스 컨트롤러.

    Generic controller for one backend resource, bound to one authenticated
    client. Subclasses narrow ``operations`` to what the backend supports.

    Attributes:
        client: 세션 토큰에 바인딩된 클라이언트 (Client bound to the session token)
        repository: 리소스 레포지토리 (Resource repository)
        form_model: 쓰기 폼 모델 (Write-side form model)
        cache_ttl: 목록 재사용 허용 시간(초) (Seconds a fetched list may be reused)
        reconcile_delay: 삭제 후 재조회 지연(초) (Delay before the post-delete refresh)
        slow_after_ms: 로딩 표시 기준(ms) (Loading time after which ``is_slow`` is set)
        settled_limit: 보관할 완료 상태 수 (Settled statuses kept until consumed)
    """

    operations: ClassVar[frozenset[str]] = ALL_OPERATIONS

    def __init__(
        self,
        client: httpx.AsyncClient,
        repository: ResourceRepository[EntityT],
        form_model: type[FormT],
        cache_ttl: float = settings.LIST_CACHE_TTL_SECONDS,
        reconcile_delay: float = settings.RECONCILE_DELAY_SECONDS,
        slow_after_ms: int = settings.SLOW_OPERATION_MS,
        settled_limit: int = settings.MAX_SETTLED_STATUSES,
    ) -> None:
        self.client: httpx.AsyncClient = client
        self.repository: ResourceRepository[EntityT] = repository
        self.form_model: type[FormT] = form_model
        self.cache_ttl: float = cache_ttl
        self.reconcile_delay: float = reconcile_delay
        self.slow_after_ms: int = slow_after_ms
        self.settled_limit: int = settled_limit

        self._items: list[EntityT] = []
        self._loaded: bool = False
        self._stale: bool = True
        self._filter: str | None = None
        self._fetched_at: float = 0.0

        self._statuses: dict[str, OperationStatus] = {}
        self._started: dict[str, float] = {}

        self._closed: bool = False
        self._reconcile_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # 목록 상태 — List state
    # ------------------------------------------------------------------
    @property
    def items(self) -> list[EntityT]:
        """마지막으로 알려진 목록 (Last known list, possibly stale)."""
        return list(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_filter(self) -> str | None:
        return self._filter

    def items_for(self, filter_value: str | None) -> list[EntityT]:
        """같은 필터로 조회한 목록만 반환 — 다른 필터의 잔여 항목은 숨김."""
        if not self._loaded or self._filter != filter_value:
            return []
        return list(self._items)

    def invalidate(self) -> None:
        self._stale = True

    def is_fresh(self, filter_value: str | None) -> bool:
        if not self._loaded or self._stale or self._filter != filter_value:
            return False
        return (time.monotonic() - self._fetched_at) < self.cache_ttl

    # ------------------------------------------------------------------
    # 작업 상태 — Per-key operation status
    # ------------------------------------------------------------------
    def status(self, key: str) -> OperationStatus:
        current = self._statuses.get(key)
        if current is None:
            return OperationStatus(key=key)
        if current.state is OperationState.LOADING:
            elapsed_ms = (time.monotonic() - self._started.get(key, time.monotonic())) * 1000
            return current.model_copy(update={"is_slow": elapsed_ms >= self.slow_after_ms})
        return current

    def consume(self, key: str) -> OperationStatus:
        """상태를 읽고 idle 로 되돌립니다. 진행 중인 작업은 그대로 유지.

        Read a status and reset it to idle. An in-flight operation is
        reported but left in place.
        """
        current = self.status(key)
        if current.state is not OperationState.LOADING:
            self._statuses.pop(key, None)
            self._started.pop(key, None)
        return current

    def pending(self) -> list[OperationStatus]:
        return [
            self.status(key)
            for key, current in self._statuses.items()
            if current.state is OperationState.LOADING
        ]

    def consume_settled(self) -> list[OperationStatus]:
        """완료된 상태를 모두 읽고 idle 로 되돌립니다 (진행 중인 작업은 유지)."""
        settled = [s for s in self._statuses.values() if s.state is not OperationState.LOADING]
        for current in settled:
            del self._statuses[current.key]
        return settled

    def _begin(self, key: str) -> None:
        if self._closed:
            return
        self._started[key] = time.monotonic()
        self._statuses[key] = OperationStatus(
            key=key,
            state=OperationState.LOADING,
            started_at=datetime.now(timezone.utc),
        )

    def _settle(self, key: str, error: str | None = None) -> None:
        if self._closed:
            return
        self._started.pop(key, None)
        # 완료 순서 유지 — settled statuses stay in completion order
        self._statuses.pop(key, None)
        self._statuses[key] = OperationStatus(
            key=key,
            state=OperationState.ERROR if error else OperationState.SUCCESS,
            error=error,
        )
        settled = [k for k, s in self._statuses.items() if s.state is not OperationState.LOADING]
        for stale in settled[: max(len(settled) - self.settled_limit, 0)]:
            del self._statuses[stale]

    def _require(self, operation: str) -> None:
        if operation not in self.operations:
            raise BadRequestError(
                f"{self.repository.label} does not support the '{operation}' operation"
            )

    # ------------------------------------------------------------------
    # 검증 — Validation
    # ------------------------------------------------------------------
    def validate(self, data: Mapping[str, Any] | FormT) -> FormT:
        """폼 데이터를 검증합니다. 실패 시 네트워크 호출 없이 422.

        Raises:
            FormValidationError: 필드별 오류 (Field-level errors)
        """
        if isinstance(data, self.form_model):
            return data
        try:
            return self.form_model.model_validate(data)
        except ValidationError as exc:
            raise FormValidationError(field_errors(exc)) from exc

    # ------------------------------------------------------------------
    # 조회 — Reads
    # ------------------------------------------------------------------
    async def list(self, filter_value: str | None = None, refresh: bool = False) -> list[EntityT]:
        """목록을 조회합니다.

        Fetch the collection, or serve the cached list when it is fresh for
        the same filter. On failure the previous items are kept, the error
        is recorded under ``"list"`` and the exception is re-raised.

        Args:
            filter_value: 꽃집 ID 필터 (Store id filter, where supported)
            refresh: 캐시 무시 (Bypass the cache)
        """
        self._require("list")
        if not refresh and self.is_fresh(filter_value):
            return list(self._items)

        self._begin(LIST_KEY)
        try:
            items = await self.repository.fetch_all(self.client, filter_value)
        except HTTPException as exc:
            self._settle(LIST_KEY, error_message(exc.detail))
            raise

        if self._closed:
            return items
        self._items = items
        self._filter = filter_value
        self._loaded = True
        self._stale = False
        self._fetched_at = time.monotonic()
        self._settle(LIST_KEY)
        return list(items)

    async def get_one(self, record_id: str) -> EntityT:
        """단일 레코드 조회 — 404 는 NotFoundError 로 구분됩니다."""
        self._require("get")
        self._begin(record_id)
        try:
            entity = await self.repository.fetch_one(self.client, record_id)
        except HTTPException as exc:
            self._settle(record_id, error_message(exc.detail))
            raise
        self._settle(record_id)
        return entity

    # ------------------------------------------------------------------
    # 변경 — Mutations
    # ------------------------------------------------------------------
    async def create(self, data: Mapping[str, Any] | FormT) -> EntityT:
        self._require("create")
        form = self.validate(data)

        self._begin(CREATE_KEY)
        try:
            entity = await self.repository.create(self.client, form)
        except HTTPException as exc:
            self._settle(CREATE_KEY, error_message(exc.detail))
            raise
        finally:
            self.invalidate()
        self._settle(CREATE_KEY)
        return entity

    async def update(self, record_id: str, data: Mapping[str, Any] | FormT) -> EntityT:
        self._require("update")
        form = self.validate(data)

        self._begin(record_id)
        try:
            entity = await self.repository.update(self.client, record_id, form)
        except HTTPException as exc:
            self._settle(record_id, error_message(exc.detail))
            raise
        finally:
            self.invalidate()
        self._settle(record_id)
        return entity

    async def remove(self, record_id: str, confirm: bool = False) -> None:
        """단일 삭제 — confirm=True 없이는 아무것도 보내지 않습니다.

        Raises:
            ConfirmationRequiredError: 확인 없음 (Not confirmed)
        """
        self._require("delete")
        if not confirm:
            raise ConfirmationRequiredError(f"Deleting this {self.repository.label.lower()} must be confirmed")

        self._begin(record_id)
        try:
            await self.repository.delete(self.client, record_id)
        except HTTPException as exc:
            self._settle(record_id, error_message(exc.detail))
            raise
        finally:
            self.invalidate()

        if self._closed:
            return
        self._items = [item for item in self._items if item.id != record_id]
        self._settle(record_id)
        self._schedule_reconcile()

    async def bulk_remove(self, ids: Iterable[str], confirm: bool = False) -> BulkDeleteResult:
        """일괄 삭제 — 동시에 실행하고 성공/실패로 분류합니다.

        Delete every id concurrently. Partial failure is not an exception:
        the result reports "N of M deleted" and the local list keeps exactly
        the items whose deletion failed.

        Raises:
            ConfirmationRequiredError: 확인 없음 (Not confirmed)
        """
        self._require("delete")
        unique_ids = list(dict.fromkeys(str(i) for i in ids if i))
        if not confirm:
            raise ConfirmationRequiredError(
                f"Deleting {len(unique_ids)} {self.repository.label.lower()}(s) must be confirmed"
            )
        if not unique_ids:
            return BulkDeleteResult()

        for record_id in unique_ids:
            self._begin(record_id)
        try:
            outcomes = await asyncio.gather(*(self._delete_one(i) for i in unique_ids))
        finally:
            self.invalidate()

        result = BulkDeleteResult(
            succeeded=[i for i, failure in zip(unique_ids, outcomes) if failure is None],
            failed={i: failure for i, failure in zip(unique_ids, outcomes) if failure is not None},
        )
        if self._closed:
            return result
        if result.succeeded:
            deleted = set(result.succeeded)
            self._items = [item for item in self._items if item.id not in deleted]
            self._schedule_reconcile()
        return result

    async def _delete_one(self, record_id: str) -> str | None:
        """한 건 삭제 — 실패 메시지 또는 None 반환."""
        try:
            await self.repository.delete(self.client, record_id)
        except HTTPException as exc:
            message = error_message(exc.detail)
            self._settle(record_id, message)
            return message
        self._settle(record_id)
        return None

    # ------------------------------------------------------------------
    # 재조회 및 수명 주기 — Reconcile and lifecycle
    # ------------------------------------------------------------------
    def _schedule_reconcile(self) -> None:
        if self._reconcile_task is not None and not self._reconcile_task.done():
            self._reconcile_task.cancel()
        self._reconcile_task = asyncio.create_task(self._reconcile(self._filter))

    async def _reconcile(self, filter_value: str | None) -> None:
        await asyncio.sleep(self.reconcile_delay)
        if self._closed:
            return
        try:
            await self.list(filter_value, refresh=True)
        except HTTPException:
            # 실패는 "list" 상태에 이미 기록됨 (Already recorded on the "list" status)
            return

    def close(self) -> None:
        """컨트롤러 분리 — 이후 결과는 무시, 예약된 재조회 취소."""
        self._closed = True
        if self._reconcile_task is not None and not self._reconcile_task.done():
            self._reconcile_task.cancel()

    async def drain(self) -> None:
        """예약된 백그라운드 작업이 끝날 때까지 기다립니다."""
        task = self._reconcile_task
        if task is not None and not task.done():
            await asyncio.wait({task})
