"""DataLoaders for batch-loading catalog entities by primary key.

Prevents N+1 queries when resolving references (a software build's device,
a capability result's provider) by batching every id requested in one event
loop tick into a single ``IN`` query.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from strawberry.dataloader import DataLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from capability_service.core.database import BaseRepository

T = TypeVar("T")


class EntityDataLoader(Generic[T]):
    """DataLoader for batch-loading one model by integer id.

    Each request gets its own loader instance for proper caching.

    Usage:
        loader = EntityDataLoader(session, DeviceRepository(), lock)
        device = await loader.load(7)  # Batched with other loads
        devices = await loader.load_many([1, 2, 3])
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: BaseRepository[T],
        lock: asyncio.Lock,
    ) -> None:
        self._session = session
        self._repository = repository
        self._lock = lock
        self._loader: DataLoader[int, T | None] = DataLoader(load_fn=self._batch_load)

    async def _batch_load(self, ids: list[int]) -> list[T | None]:
        """Load every id with one query; missing ids resolve to None, in key order."""
        if not ids:
            return []

        async with self._lock:
            items = await self._repository.get_many(self._session, set(ids))
        by_id = {item.id: item for item in items}  # type: ignore[attr-defined]
        return [by_id.get(id_) for id_ in ids]

    async def load(self, id_: int) -> T | None:
        return await self._loader.load(id_)

    async def load_many(self, ids: Sequence[int]) -> list[T | None]:
        return list(await self._loader.load_many(list(ids)))


__all__ = ["EntityDataLoader"]
