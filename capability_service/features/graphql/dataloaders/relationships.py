"""Relationship DataLoaders for solving N+1 queries on catalog associations.

These loaders resolve the per-object fields of the schema: a device's
software builds, the bands, combos and features granted to a device (per
build, optionally per provider), and the bands that make up a combo.

Composite keys are NamedTuples. Every batch is served by one query per grant
table: the statement pre-filters with ``IN`` on the ids seen in the batch and
the exact key tuples are matched back in Python.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple, Protocol

from strawberry.dataloader import DataLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Iterable, Sequence
    from datetime import date

    from sqlalchemy.ext.asyncio import AsyncSession

    from capability_service.features.capabilities import (
        Band,
        ComboRepository,
        Software,
        SoftwareRepository,
    )
    from capability_service.features.capabilities.schemas import AssignedCapability


class SoftwareKey(NamedTuple):
    """Software builds of one device, optionally filtered."""

    device_id: int
    platform: str | None = None
    released_after: date | None = None


class CapabilityKey(NamedTuple):
    """Capabilities granted to one device.

    ``software_id=None`` covers every build of the device and
    ``provider_id=None`` reads global grants. ``technology`` filters bands
    and combos by their technology.
    """

    device_id: int
    software_id: int | None = None
    provider_id: int | None = None
    technology: str | None = None


def software_cache_key(key: SoftwareKey) -> tuple[int, str, str]:
    released = key.released_after.isoformat() if key.released_after else "any"
    return (key.device_id, key.platform or "all", released)


def capability_cache_key(key: CapabilityKey) -> tuple[int, int, int, str]:
    return (
        key.device_id,
        -1 if key.software_id is None else key.software_id,
        -1 if key.provider_id is None else key.provider_id,
        key.technology or "all",
    )


class GrantReader(Protocol):
    async def find_by_device_software(
        self,
        session: AsyncSession,
        device_ids: Iterable[int],
        software_ids: Iterable[int] | None,
        *,
        provider_ids: Iterable[int] | None = None,
    ) -> list[AssignedCapability]: ...


class SoftwareByDeviceDataLoader:
    """DataLoader for batch-loading software builds by device.

    Usage:
        loader = SoftwareByDeviceDataLoader(session, SoftwareRepository(), lock)
        builds = await loader.load(SoftwareKey(device_id=1, platform="Android"))
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: SoftwareRepository,
        lock: asyncio.Lock,
    ) -> None:
        self._session = session
        self._repository = repository
        self._lock = lock
        self._loader: DataLoader[SoftwareKey, list[Software]] = DataLoader(
            load_fn=self._batch_load,
            cache_key_fn=software_cache_key,
        )

    async def _batch_load(self, keys: list[SoftwareKey]) -> list[list[Software]]:
        """Fetch the builds of every device in the batch, then filter per key."""
        async with self._lock:
            builds = await self._repository.find_by_devices(
                self._session, {key.device_id for key in keys}
            )

        by_device: dict[int, list[Software]] = {}
        for build in builds:
            by_device.setdefault(build.device_id, []).append(build)

        results: list[list[Software]] = []
        for key in keys:
            matching = by_device.get(key.device_id, [])
            if key.platform:
                matching = [s for s in matching if s.platform == key.platform]
            if key.released_after:
                matching = [s for s in matching if s.release_date >= key.released_after]
            results.append(matching)
        return results

    async def load(self, key: SoftwareKey) -> list[Software]:
        return await self._loader.load(key)


class DeviceCapabilityDataLoader:
    """DataLoader for batch-loading granted capabilities by device/software.

    Backed by a repository's ``find_by_device_software``. Keys with and
    without a provider are served from separate grant reads, so at most two
    queries run per batch.

    Usage:
        loader = DeviceCapabilityDataLoader(session, BandRepository(), lock)
        bands = await loader.load(CapabilityKey(device_id=1, software_id=2, technology="LTE"))
    """

    def __init__(self, session: AsyncSession, repository: GrantReader, lock: asyncio.Lock) -> None:
        self._session = session
        self._repository = repository
        self._lock = lock
        self._loader: DataLoader[CapabilityKey, list[Any]] = DataLoader(
            load_fn=self._batch_load,
            cache_key_fn=capability_cache_key,
        )

    async def _batch_load(self, keys: list[CapabilityKey]) -> list[list[Any]]:
        global_keys = [k for k in keys if k.provider_id is None]
        scoped_keys = [k for k in keys if k.provider_id is not None]

        rows: list[AssignedCapability] = []
        async with self._lock:
            if global_keys:
                rows.extend(await self._fetch(global_keys, provider_ids=None))
            if scoped_keys:
                provider_ids = {k.provider_id for k in scoped_keys if k.provider_id is not None}
                rows.extend(await self._fetch(scoped_keys, provider_ids=provider_ids))

        return [self._select(rows, key) for key in keys]

    async def _fetch(
        self,
        keys: Sequence[CapabilityKey],
        *,
        provider_ids: set[int] | None,
    ) -> list[AssignedCapability]:
        software_ids: set[int] | None = {k.software_id for k in keys if k.software_id is not None}
        if any(k.software_id is None for k in keys):
            software_ids = None
        return await self._repository.find_by_device_software(
            self._session,
            {k.device_id for k in keys},
            software_ids,
            provider_ids=provider_ids,
        )

    @staticmethod
    def _select(rows: Iterable[AssignedCapability], key: CapabilityKey) -> list[Any]:
        """Rows matching ``key`` exactly, one entry per capability id."""
        seen: set[int] = set()
        selected: list[Any] = []
        for row in rows:
            if row.device_id != key.device_id:
                continue
            if key.software_id is not None and row.software_id != key.software_id:
                continue
            if row.provider_id != key.provider_id:
                continue
            capability = row.capability
            if key.technology and capability.technology != key.technology:
                continue
            if capability.id in seen:
                continue
            seen.add(capability.id)
            selected.append(capability)
        return selected

    async def load(self, key: CapabilityKey) -> list[Any]:
        return await self._loader.load(key)


class BandsByComboDataLoader:
    """DataLoader for batch-loading the bands of combos, in position order."""

    def __init__(self, session: AsyncSession, repository: ComboRepository, lock: asyncio.Lock) -> None:
        self._session = session
        self._repository = repository
        self._lock = lock
        self._loader: DataLoader[int, list[Band]] = DataLoader(load_fn=self._batch_load)

    async def _batch_load(self, combo_ids: list[int]) -> list[list[Band]]:
        async with self._lock:
            pairs = await self._repository.find_bands_by_combos(self._session, set(combo_ids))

        bands_by_combo: dict[int, list[Band]] = {}
        for combo_id, band in pairs:
            bands_by_combo.setdefault(combo_id, []).append(band)
        return [bands_by_combo.get(combo_id, []) for combo_id in combo_ids]

    async def load(self, combo_id: int) -> list[Band]:
        return await self._loader.load(combo_id)


__all__ = [
    "BandsByComboDataLoader",
    "CapabilityKey",
    "DeviceCapabilityDataLoader",
    "SoftwareByDeviceDataLoader",
    "SoftwareKey",
    "capability_cache_key",
    "software_cache_key",
]
