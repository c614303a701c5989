"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine, session and seeded catalog
    - Application Fixtures: FastAPI app and HTTP client bound to the test database

The seeded catalog (see :func:`catalog`) is small but covers global and
provider-specific grants for bands, combos and features:

    Devices (vendor order): Apple A2849 (d1), Google GP4BC (d3), Samsung SM-S918B (d2)
    Software: s1, s2 on d1 (iOS); s3 on d2 (Android); s4 on d3 (Android)
    Bands: b1 LTE 7, b2 NR n77, b3 LTE 66
    Combos: c1 LTE CA [b1, b3]; c2 EN-DC [b3, b2]
    Features: f1 VoLTE, f2 VoNR
    Providers: p1 Alpha Mobile, p2 Beta Telecom

    Global band grants:   (d1,s1,b1) (d1,s2,b1) (d2,s3,b1) (d1,s1,b2)
    Provider band grants: (p1,d2,s3,b1) (p2,d1,s1,b1)
    Global combo grants:  (d1,s1,c1) (d2,s3,c1)
    Provider combo grants: (p1,d3,s4,c2)
    Feature grants:       (d1,s1,p1,f1) (d2,s3,p1,f1) (d2,s3,p2,f1) (d3,s4,p2,f2)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import os
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ============================================================================
# Database Fixtures
# ============================================================================


@dataclass(frozen=True)
class Catalog:
    """Primary keys of the seeded catalog rows."""

    d1: int
    d2: int
    d3: int
    s1: int
    s2: int
    s3: int
    s4: int
    b1: int
    b2: int
    b3: int
    c1: int
    c2: int
    f1: int
    f2: int
    p1: int
    p2: int


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine on a single shared in-memory SQLite connection, schema created."""
    from capability_service.core.database import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for direct repository/resolver tests."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
async def catalog(session_factory: async_sessionmaker[AsyncSession]) -> Catalog:
    """Seed the capability catalog described in the module docstring."""
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

    async with session_factory() as session:
        p1 = Provider(name="Alpha Mobile", country="US", network_type="5G")
        p2 = Provider(name="Beta Telecom", country="CA", network_type="LTE")
        d1 = Device(vendor="Apple", model_num="A2849", market_name="iPhone 15 Pro", release_date=date(2023, 9, 22))
        d2 = Device(vendor="Samsung", model_num="SM-S918B", market_name="Galaxy S23 Ultra", release_date=date(2023, 2, 17))
        d3 = Device(vendor="Google", model_num="GP4BC", market_name="Pixel 8", release_date=date(2023, 10, 12))
        b1 = Band(band_number="7", technology="LTE", dl_band_class="2600", ul_band_class="2600")
        b2 = Band(band_number="n77", technology="NR", dl_band_class="3700")
        b3 = Band(band_number="66", technology="LTE", dl_band_class="AWS-3")
        c1 = Combo(name="CA_7A-66A", technology="LTE CA")
        c2 = Combo(name="DC_66A_n77A", technology="EN-DC")
        f1 = Feature(name="VoLTE", description="Voice over LTE")
        f2 = Feature(name="VoNR", description="Voice over New Radio")
        session.add_all([p1, p2, d1, d2, d3, b1, b2, b3, c1, c2, f1, f2])
        await session.flush()

        s1 = Software(name="iOS 17.0", platform="iOS", build_number="21A329", release_date=date(2023, 9, 18), device_id=d1.id)
        s2 = Software(name="iOS 17.1", platform="iOS", build_number="21B74", release_date=date(2023, 10, 25), device_id=d1.id)
        s3 = Software(name="One UI 5.1", platform="Android", ptcrb=12345, svn=3, release_date=date(2023, 2, 1), device_id=d2.id)
        s4 = Software(name="Android 14", platform="Android", release_date=date(2023, 10, 4), device_id=d3.id)
        session.add_all([s1, s2, s3, s4])
        await session.flush()

        await session.execute(
            insert(combo_band),
            [
                {"combo_id": c1.id, "band_id": b1.id, "position": 0},
                {"combo_id": c1.id, "band_id": b3.id, "position": 1},
                {"combo_id": c2.id, "band_id": b3.id, "position": 0},
                {"combo_id": c2.id, "band_id": b2.id, "position": 1},
            ],
        )
        await session.execute(
            insert(device_software_band),
            [
                {"device_id": d1.id, "software_id": s1.id, "band_id": b1.id},
                {"device_id": d1.id, "software_id": s2.id, "band_id": b1.id},
                {"device_id": d2.id, "software_id": s3.id, "band_id": b1.id},
                {"device_id": d1.id, "software_id": s1.id, "band_id": b2.id},
            ],
        )
        await session.execute(
            insert(provider_device_software_band),
            [
                {"provider_id": p1.id, "device_id": d2.id, "software_id": s3.id, "band_id": b1.id},
                {"provider_id": p2.id, "device_id": d1.id, "software_id": s1.id, "band_id": b1.id},
            ],
        )
        await session.execute(
            insert(device_software_combo),
            [
                {"device_id": d1.id, "software_id": s1.id, "combo_id": c1.id},
                {"device_id": d2.id, "software_id": s3.id, "combo_id": c1.id},
            ],
        )
        await session.execute(
            insert(provider_device_software_combo),
            [{"provider_id": p1.id, "device_id": d3.id, "software_id": s4.id, "combo_id": c2.id}],
        )
        await session.execute(
            insert(device_software_provider_feature),
            [
                {"device_id": d1.id, "software_id": s1.id, "provider_id": p1.id, "feature_id": f1.id},
                {"device_id": d2.id, "software_id": s3.id, "provider_id": p1.id, "feature_id": f1.id},
                {"device_id": d2.id, "software_id": s3.id, "provider_id": p2.id, "feature_id": f1.id},
                {"device_id": d3.id, "software_id": s4.id, "provider_id": p2.id, "feature_id": f2.id},
            ],
        )
        await session.commit()

        return Catalog(
            d1=d1.id, d2=d2.id, d3=d3.id,
            s1=s1.id, s2=s2.id, s3=s3.id, s4=s4.id,
            b1=b1.id, b2=b2.id, b3=b3.id,
            c1=c1.id, c2=c2.id,
            f1=f1.id, f2=f2.id,
            p1=p1.id, p2=p2.id,
        )  # fmt: skip


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def graphql_settings():
    """GraphQL settings for app tests; override in a module to change limits."""
    from capability_service.core.settings import GraphQLSettings

    return GraphQLSettings()


@pytest.fixture
def app_settings():
    from capability_service.core.settings import AppSettings

    return AppSettings(environment="test")


@pytest.fixture
def app(app_settings, graphql_settings, session_factory) -> FastAPI:
    """FastAPI application whose database dependency uses the test engine."""
    from capability_service.app.main import create_app
    from capability_service.core.dependencies.database import get_db_session

    application = create_app(app_settings=app_settings, graphql_settings=graphql_settings)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test application.

    Example:
        async def test_health_check(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
