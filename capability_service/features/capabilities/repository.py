"""Repositories for the capability catalog.

Each repository extends :class:`BaseRepository` with the catalog searches and
grant-table reads the GraphQL layer needs. All methods take the session
explicitly, never write, and let storage errors propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Table, select

from capability_service.core.database import BaseRepository
from capability_service.features.capabilities.models import (
    Band,
    Combo,
    Device,
    Feature,
    Provider,
    Software,
    combo_band,
    device_software_band,
    device_software_combo,
    device_software_provider_feature,
    provider_device_software_band,
    provider_device_software_combo,
)
from capability_service.features.capabilities.schemas import AssignedCapability, GrantRow

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession


def _contains(column: Any, text: str) -> ColumnElement[bool]:
    return column.like(f"%{text}%")


async def _supporting_rows(
    session: AsyncSession,
    grant: Table,
    conditions: list[ColumnElement[bool]],
    *,
    join_target: tuple[Any, ColumnElement[bool]] | None = None,
) -> list[GrantRow]:
    """Read distinct (device, software[, provider_id]) rows from a grant table.

    Rows are ordered by vendor then model number; ids break ties so the
    order is stable across engines.
    """
    columns: list[Any] = [Device, Software]
    with_provider = "provider_id" in grant.c
    if with_provider:
        columns.append(grant.c.provider_id)

    stmt = (
        select(*columns)
        .distinct()
        .select_from(grant)
        .join(Device, grant.c.device_id == Device.id)
        .join(Software, grant.c.software_id == Software.id)
    )
    if join_target is not None:
        stmt = stmt.join(*join_target)
    stmt = stmt.where(*conditions).order_by(
        Device.vendor, Device.model_num, Device.id, Software.id
    )

    result = await session.execute(stmt)
    return [
        GrantRow(row[0], row[1], row[2] if with_provider else None)
        for row in result.all()
    ]


async def _assigned(
    session: AsyncSession,
    grant: Table,
    model: Any,
    capability_column: Any,
    device_ids: Iterable[int],
    software_ids: Iterable[int] | None,
    provider_ids: Iterable[int] | None,
) -> list[AssignedCapability]:
    """Read capabilities granted to any of the given devices/software.

    The ``IN`` filters are a superset of the exact key tuples; callers match
    rows back to their keys. ``software_ids=None`` reads every build of the
    devices.
    """
    with_provider = provider_ids is not None
    columns: list[Any] = [grant.c.device_id, grant.c.software_id]
    if with_provider:
        columns.append(grant.c.provider_id)

    stmt = (
        select(*columns, model)
        .distinct()
        .select_from(grant)
        .join(model, capability_column == model.id)
        .where(grant.c.device_id.in_(list(device_ids)))
        .order_by(model.id)
    )
    if software_ids is not None:
        stmt = stmt.where(grant.c.software_id.in_(list(software_ids)))
    if with_provider:
        stmt = stmt.where(grant.c.provider_id.in_(list(provider_ids)))

    result = await session.execute(stmt)
    if with_provider:
        return [AssignedCapability(d, s, p, item) for d, s, p, item in result.all()]
    return [AssignedCapability(d, s, None, item) for d, s, item in result.all()]


class DeviceRepository(BaseRepository[Device]):
    """Device lookups and search."""

    def __init__(self) -> None:
        super().__init__(Device)

    async def search(
        self,
        session: AsyncSession,
        *,
        vendor: str | None = None,
        model_num: str | None = None,
        market_name: str | None = None,
        released_after: date | None = None,
        released_before: date | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Device]:
        """Search devices by partial vendor/model/market name and release window.

        Results are ordered by release date.
        """
        stmt = select(Device)
        if vendor:
            stmt = stmt.where(_contains(Device.vendor, vendor))
        if model_num:
            stmt = stmt.where(_contains(Device.model_num, model_num))
        if market_name:
            stmt = stmt.where(_contains(Device.market_name, market_name))
        if released_after:
            stmt = stmt.where(Device.release_date >= released_after)
        if released_before:
            stmt = stmt.where(Device.release_date <= released_before)
        stmt = stmt.order_by(Device.release_date, Device.id)
        return await self.list(session, stmt, limit=limit, offset=offset)


class SoftwareRepository(BaseRepository[Software]):
    """Software build lookups."""

    def __init__(self) -> None:
        super().__init__(Software)

    async def find_by_device(
        self,
        session: AsyncSession,
        device_id: int,
        *,
        platform: str | None = None,
        released_after: date | None = None,
    ) -> Sequence[Software]:
        stmt = select(Software).where(Software.device_id == device_id)
        if platform:
            stmt = stmt.where(Software.platform == platform)
        if released_after:
            stmt = stmt.where(Software.release_date >= released_after)
        stmt = stmt.order_by(Software.release_date, Software.id)
        return await self.list(session, stmt)

    async def find_by_devices(
        self, session: AsyncSession, device_ids: Iterable[int]
    ) -> Sequence[Software]:
        """Software for several devices at once, ordered by device then release date."""
        ids = list(device_ids)
        if not ids:
            return []
        stmt = (
            select(Software)
            .where(Software.device_id.in_(ids))
            .order_by(Software.device_id, Software.release_date, Software.id)
        )
        return await self.list(session, stmt)


class BandRepository(BaseRepository[Band]):
    """Band lookups and band grant reads."""

    def __init__(self) -> None:
        super().__init__(Band)

    async def search(
        self,
        session: AsyncSession,
        *,
        technology: str | None = None,
        band_number: str | None = None,
    ) -> Sequence[Band]:
        stmt = select(Band)
        if technology:
            stmt = stmt.where(Band.technology == technology)
        if band_number:
            stmt = stmt.where(_contains(Band.band_number, band_number))
        stmt = stmt.order_by(Band.technology, Band.band_number)
        return await self.list(session, stmt)

    async def supporting_rows(
        self,
        session: AsyncSession,
        band_id: int,
        *,
        provider_id: int | None = None,
        technology: str | None = None,
    ) -> list[GrantRow]:
        """Grant rows for one band, from the global or the provider table."""
        grant = device_software_band if provider_id is None else provider_device_software_band
        conditions = [grant.c.band_id == band_id]
        if provider_id is not None:
            conditions.append(grant.c.provider_id == provider_id)
        join_target = None
        if technology:
            join_target = (Band, grant.c.band_id == Band.id)
            conditions.append(Band.technology == technology)

        rows = await _supporting_rows(session, grant, conditions, join_target=join_target)
        self._lazy.debug(
            lambda: f"db.supporting_rows: band={band_id} provider={provider_id} -> {len(rows)} rows"
        )
        return rows

    async def find_by_device_software(
        self,
        session: AsyncSession,
        device_ids: Iterable[int],
        software_ids: Iterable[int] | None,
        *,
        provider_ids: Iterable[int] | None = None,
    ) -> list[AssignedCapability]:
        """Bands granted to the given device/software pairs.

        With ``provider_ids`` the provider grant table is read instead of the
        global one.
        """
        grant = device_software_band if provider_ids is None else provider_device_software_band
        return await _assigned(
            session, grant, Band, grant.c.band_id, device_ids, software_ids, provider_ids
        )


class ComboRepository(BaseRepository[Combo]):
    """Combo lookups, combo composition and combo grant reads."""

    def __init__(self) -> None:
        super().__init__(Combo)

    async def search(
        self,
        session: AsyncSession,
        *,
        technology: str | None = None,
        name: str | None = None,
    ) -> Sequence[Combo]:
        stmt = select(Combo)
        if technology:
            stmt = stmt.where(Combo.technology == technology)
        if name:
            stmt = stmt.where(_contains(Combo.name, name))
        stmt = stmt.order_by(Combo.technology, Combo.name)
        return await self.list(session, stmt)

    async def find_bands_by_combos(
        self, session: AsyncSession, combo_ids: Iterable[int]
    ) -> list[tuple[int, Band]]:
        """(combo_id, band) pairs ordered by combo then band position."""
        ids = list(combo_ids)
        if not ids:
            return []
        stmt = (
            select(combo_band.c.combo_id, Band)
            .join(Band, combo_band.c.band_id == Band.id)
            .where(combo_band.c.combo_id.in_(ids))
            .order_by(combo_band.c.combo_id, combo_band.c.position, Band.id)
        )
        result = await session.execute(stmt)
        return [(combo_id, band) for combo_id, band in result.all()]

    async def supporting_rows(
        self,
        session: AsyncSession,
        combo_id: int,
        *,
        provider_id: int | None = None,
        technology: str | None = None,
    ) -> list[GrantRow]:
        """Grant rows for one combo, from the global or the provider table."""
        grant = device_software_combo if provider_id is None else provider_device_software_combo
        conditions = [grant.c.combo_id == combo_id]
        if provider_id is not None:
            conditions.append(grant.c.provider_id == provider_id)
        join_target = None
        if technology:
            join_target = (Combo, grant.c.combo_id == Combo.id)
            conditions.append(Combo.technology == technology)

        rows = await _supporting_rows(session, grant, conditions, join_target=join_target)
        self._lazy.debug(
            lambda: f"db.supporting_rows: combo={combo_id} provider={provider_id} -> {len(rows)} rows"
        )
        return rows

    async def find_by_device_software(
        self,
        session: AsyncSession,
        device_ids: Iterable[int],
        software_ids: Iterable[int] | None,
        *,
        provider_ids: Iterable[int] | None = None,
    ) -> list[AssignedCapability]:
        grant = device_software_combo if provider_ids is None else provider_device_software_combo
        return await _assigned(
            session, grant, Combo, grant.c.combo_id, device_ids, software_ids, provider_ids
        )


class FeatureRepository(BaseRepository[Feature]):
    """Feature lookups and feature grant reads.

    Features only have a per-provider grant table; global support is the
    same table read without the provider predicate.
    """

    def __init__(self) -> None:
        super().__init__(Feature)

    async def search(self, session: AsyncSession, *, name: str | None = None) -> Sequence[Feature]:
        stmt = select(Feature)
        if name:
            stmt = stmt.where(_contains(Feature.name, name))
        stmt = stmt.order_by(Feature.name)
        return await self.list(session, stmt)

    async def supporting_rows(
        self,
        session: AsyncSession,
        feature_id: int,
        *,
        provider_id: int | None = None,
    ) -> list[GrantRow]:
        grant = device_software_provider_feature
        conditions = [grant.c.feature_id == feature_id]
        if provider_id is not None:
            conditions.append(grant.c.provider_id == provider_id)

        rows = await _supporting_rows(session, grant, conditions)
        self._lazy.debug(
            lambda: f"db.supporting_rows: feature={feature_id} provider={provider_id} -> {len(rows)} rows"
        )
        return rows

    async def find_by_device_software(
        self,
        session: AsyncSession,
        device_ids: Iterable[int],
        software_ids: Iterable[int] | None,
        *,
        provider_ids: Iterable[int] | None = None,
    ) -> list[AssignedCapability]:
        """Features granted to the given pairs; any provider when ``provider_ids`` is None."""
        grant = device_software_provider_feature
        return await _assigned(
            session, grant, Feature, grant.c.feature_id, device_ids, software_ids, provider_ids
        )


class ProviderRepository(BaseRepository[Provider]):
    """Provider lookups."""

    def __init__(self) -> None:
        super().__init__(Provider)

    async def find_all(self, session: AsyncSession) -> Sequence[Provider]:
        return await self.list(session, select(Provider).order_by(Provider.name, Provider.id))


__all__ = [
    "BandRepository",
    "ComboRepository",
    "DeviceRepository",
    "FeatureRepository",
    "ProviderRepository",
    "SoftwareRepository",
]
