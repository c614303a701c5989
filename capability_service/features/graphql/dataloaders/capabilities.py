"""Reverse-lookup DataLoaders: which devices support a band, combo or feature.

These delegate to :class:`CapabilityResolver`. Each distinct key is one
resolver call; the loader contributes per-request caching, so a capability
selected several times in one document (``Band.devices`` under a list of
bands, aliased root fields) is resolved once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from strawberry.dataloader import DataLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Awaitable, Callable

    from capability_service.features.capabilities import CapabilityMatch, CapabilityResolver


class CapabilityQuery(NamedTuple):
    """Devices supporting one capability, globally or for one provider."""

    capability_id: int
    provider_id: int | None = None
    technology: str | None = None


def capability_query_cache_key(key: CapabilityQuery) -> tuple[int, int, str]:
    return (
        key.capability_id,
        -1 if key.provider_id is None else key.provider_id,
        key.technology or "all",
    )


class DevicesByCapabilityDataLoader:
    """DataLoader mapping a :class:`CapabilityQuery` to capability matches.

    Usage:
        loader = DevicesByCapabilityDataLoader(resolver.find_devices_supporting_band, lock)
        matches = await loader.load(CapabilityQuery(capability_id=7, provider_id=10))
    """

    def __init__(
        self,
        find: Callable[[CapabilityQuery], Awaitable[list[CapabilityMatch]]],
        lock: asyncio.Lock,
    ) -> None:
        self._find = find
        self._lock = lock
        self._loader: DataLoader[CapabilityQuery, list[CapabilityMatch]] = DataLoader(
            load_fn=self._batch_load,
            cache_key_fn=capability_query_cache_key,
        )

    async def _batch_load(self, keys: list[CapabilityQuery]) -> list[list[CapabilityMatch]]:
        # One session per request, so keys resolve one after another.
        async with self._lock:
            return [await self._find(key) for key in keys]

    async def load(self, key: CapabilityQuery) -> list[CapabilityMatch]:
        return await self._loader.load(key)


def devices_by_band(resolver: CapabilityResolver, lock: asyncio.Lock) -> DevicesByCapabilityDataLoader:
    async def find(key: CapabilityQuery) -> list[CapabilityMatch]:
        return await resolver.find_devices_supporting_band(
            key.capability_id, key.provider_id, key.technology
        )

    return DevicesByCapabilityDataLoader(find, lock)


def devices_by_combo(resolver: CapabilityResolver, lock: asyncio.Lock) -> DevicesByCapabilityDataLoader:
    async def find(key: CapabilityQuery) -> list[CapabilityMatch]:
        return await resolver.find_devices_supporting_combo(
            key.capability_id, key.provider_id, key.technology
        )

    return DevicesByCapabilityDataLoader(find, lock)


def devices_by_feature(resolver: CapabilityResolver, lock: asyncio.Lock) -> DevicesByCapabilityDataLoader:
    async def find(key: CapabilityQuery) -> list[CapabilityMatch]:
        return await resolver.find_devices_supporting_feature(key.capability_id, key.provider_id)

    return DevicesByCapabilityDataLoader(find, lock)


__all__ = [
    "CapabilityQuery",
    "DevicesByCapabilityDataLoader",
    "capability_query_cache_key",
    "devices_by_band",
    "devices_by_combo",
    "devices_by_feature",
]
