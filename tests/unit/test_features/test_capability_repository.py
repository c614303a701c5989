"""Tests for the capability catalog repositories against SQLite."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from capability_service.core.database import Base
from capability_service.features.capabilities import (
    BandRepository,
    ComboRepository,
    DeviceRepository,
    FeatureRepository,
    ProviderRepository,
    SoftwareRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.mark.asyncio
async def test_device_search_and_count(db_session: AsyncSession, catalog) -> None:
    repo = DeviceRepository()

    everything = await repo.search(db_session)
    by_model = await repo.search(db_session, model_num="SM-")
    by_name = await repo.search(db_session, market_name="Pixel")
    recent = await repo.search(db_session, released_after=date(2023, 10, 1))

    assert [d.id for d in everything] == [catalog.d2, catalog.d1, catalog.d3]
    assert [d.id for d in by_model] == [catalog.d2]
    assert [d.id for d in by_name] == [catalog.d3]
    assert [d.id for d in recent] == [catalog.d3]
    assert await repo.count(db_session) == 3


@pytest.mark.asyncio
async def test_get_and_get_many(db_session: AsyncSession, catalog) -> None:
    repo = ProviderRepository()

    provider = await repo.get(db_session, catalog.p1)
    many = await repo.get_many(db_session, [catalog.p2, catalog.p1, 999999])

    assert provider is not None
    assert provider.name == "Alpha Mobile"
    assert await repo.get(db_session, 999999) is None
    assert {p.id for p in many} == {catalog.p1, catalog.p2}
    assert await repo.get_many(db_session, []) == []


@pytest.mark.asyncio
async def test_software_by_device(db_session: AsyncSession, catalog) -> None:
    repo = SoftwareRepository()

    builds = await repo.find_by_device(db_session, catalog.d1, released_after=date(2023, 10, 1))
    grouped = await repo.find_by_devices(db_session, [catalog.d3, catalog.d1])

    assert [s.id for s in builds] == [catalog.s2]
    assert [s.id for s in grouped] == [catalog.s1, catalog.s2, catalog.s4]


@pytest.mark.asyncio
async def test_band_supporting_rows_are_scoped_by_table(db_session: AsyncSession, catalog) -> None:
    repo = BandRepository()

    global_rows = await repo.supporting_rows(db_session, catalog.b1)
    provider_rows = await repo.supporting_rows(db_session, catalog.b1, provider_id=catalog.p1)

    assert [(r.device.id, r.software.id, r.provider_id) for r in global_rows] == [
        (catalog.d1, catalog.s1, None),
        (catalog.d1, catalog.s2, None),
        (catalog.d2, catalog.s3, None),
    ]
    assert [(r.device.id, r.software.id, r.provider_id) for r in provider_rows] == [
        (catalog.d2, catalog.s3, catalog.p1)
    ]


@pytest.mark.asyncio
async def test_band_supporting_rows_technology_filter(db_session: AsyncSession, catalog) -> None:
    repo = BandRepository()

    assert await repo.supporting_rows(db_session, catalog.b1, technology="NR") == []
    assert len(await repo.supporting_rows(db_session, catalog.b2, technology="NR")) == 1


@pytest.mark.asyncio
async def test_combo_bands_and_search(db_session: AsyncSession, catalog) -> None:
    repo = ComboRepository()

    pairs = await repo.find_bands_by_combos(db_session, [catalog.c2, catalog.c1])
    lte = await repo.search(db_session, technology="LTE CA")

    assert [(combo_id, band.id) for combo_id, band in pairs] == [
        (catalog.c1, catalog.b1),
        (catalog.c1, catalog.b3),
        (catalog.c2, catalog.b3),
        (catalog.c2, catalog.b2),
    ]
    assert [c.id for c in lte] == [catalog.c1]


@pytest.mark.asyncio
async def test_feature_rows_carry_provider(db_session: AsyncSession, catalog) -> None:
    repo = FeatureRepository()

    rows = await repo.supporting_rows(db_session, catalog.f1)

    assert sorted((r.device.id, r.provider_id) for r in rows) == [
        (catalog.d1, catalog.p1),
        (catalog.d2, catalog.p1),
        (catalog.d2, catalog.p2),
    ]


@pytest.mark.asyncio
async def test_find_by_device_software_without_software_filter(
    db_session: AsyncSession, catalog
) -> None:
    repo = BandRepository()

    assigned = await repo.find_by_device_software(db_session, [catalog.d1], None)
    scoped = await repo.find_by_device_software(
        db_session, [catalog.d1], [catalog.s2], provider_ids=None
    )
    by_provider = await repo.find_by_device_software(
        db_session, [catalog.d1, catalog.d2], None, provider_ids=[catalog.p2]
    )

    assert sorted((a.software_id, a.capability.id) for a in assigned) == sorted(
        [(catalog.s1, catalog.b1), (catalog.s2, catalog.b1), (catalog.s1, catalog.b2)]
    )
    assert [(a.software_id, a.capability.id) for a in scoped] == [(catalog.s2, catalog.b1)]
    assert [(a.device_id, a.provider_id) for a in by_provider] == [(catalog.d1, catalog.p2)]


def test_catalog_tables_use_explicit_names() -> None:
    assert set(Base.metadata.tables) == {
        "provider",
        "feature",
        "band",
        "combo",
        "combo_band",
        "device",
        "software",
        "device_software_band",
        "provider_device_software_band",
        "device_software_combo",
        "provider_device_software_combo",
        "device_software_provider_feature",
    }


@pytest.mark.asyncio
async def test_repositories_take_no_arguments(db_session: AsyncSession, catalog) -> None:
    bands = BandRepository()

    band = await bands.get(db_session, catalog.b1)

    assert bands.model.__tablename__ == "band"
    assert band is not None
    assert band.band_number == "7"
