"""Capability resolution: which devices and software support a band, combo or feature.

Resolution is two-phase. :class:`CapabilityResolver` reads grant rows and
groups them into :class:`CapabilityMatch` values that carry only the granting
provider's id; :func:`hydrate_providers` then loads full providers through a
request-scoped loader to produce :class:`CapabilityResult` values.

No capability found is an empty list, never an error. Storage errors from the
repositories propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from capability_service.features.capabilities.repository import (
    BandRepository,
    ComboRepository,
    FeatureRepository,
)
from capability_service.features.capabilities.schemas import (
    CapabilityMatch,
    CapabilityResult,
    SupportStatus,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from capability_service.features.capabilities.models import Provider
    from capability_service.features.capabilities.schemas import GrantRow

logger = logging.getLogger(__name__)


class ProviderLoader(Protocol):
    async def load_many(self, ids: list[int]) -> list[Provider | None]: ...


def group_by_device(
    rows: Iterable[GrantRow],
    support_status: SupportStatus,
    *,
    keep_provider: bool,
) -> list[CapabilityMatch]:
    """Collapse grant rows into one match per device.

    Devices keep the order in which they first appear; software builds are
    deduplicated by id. ``keep_provider`` records the first row's provider id
    on the match.
    """
    matches: dict[int, CapabilityMatch] = {}
    seen_software: dict[int, set[int]] = {}

    for row in rows:
        match = matches.get(row.device.id)
        if match is None:
            match = CapabilityMatch(
                device=row.device,
                support_status=support_status,
                provider_id=row.provider_id if keep_provider else None,
            )
            matches[row.device.id] = match
            seen_software[row.device.id] = set()

        seen = seen_software[row.device.id]
        if row.software.id not in seen:
            seen.add(row.software.id)
            match.software.append(row.software)

    return list(matches.values())


class CapabilityResolver:
    """Finds devices supporting a capability, globally or for one provider.

    One resolver is built per request around that request's session.

    Example:
        resolver = CapabilityResolver(session)
        matches = await resolver.find_devices_supporting_band(7, provider_id=10)
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        bands: BandRepository | None = None,
        combos: ComboRepository | None = None,
        features: FeatureRepository | None = None,
    ) -> None:
        self._session = session
        self._bands = bands or BandRepository()
        self._combos = combos or ComboRepository()
        self._features = features or FeatureRepository()

    async def find_devices_supporting_band(
        self,
        band_id: int,
        provider_id: int | None = None,
        technology: str | None = None,
    ) -> list[CapabilityMatch]:
        """Devices supporting a band.

        Without a provider the global grant table is read; with one, only
        that provider's grants are.
        """
        rows = await self._bands.supporting_rows(
            self._session, band_id, provider_id=provider_id, technology=technology
        )
        return self._group(rows, provider_id, kind="band", capability_id=band_id)

    async def find_devices_supporting_combo(
        self,
        combo_id: int,
        provider_id: int | None = None,
        technology: str | None = None,
    ) -> list[CapabilityMatch]:
        """Devices supporting a combo, scoped like :meth:`find_devices_supporting_band`."""
        rows = await self._combos.supporting_rows(
            self._session, combo_id, provider_id=provider_id, technology=technology
        )
        return self._group(rows, provider_id, kind="combo", capability_id=combo_id)

    async def find_devices_supporting_feature(
        self,
        feature_id: int,
        provider_id: int | None = None,
    ) -> list[CapabilityMatch]:
        """Devices supporting a feature.

        Feature grants are always per provider; without a provider id any
        provider's grant counts and the result is tagged global.
        """
        rows = await self._features.supporting_rows(
            self._session, feature_id, provider_id=provider_id
        )
        return self._group(rows, provider_id, kind="feature", capability_id=feature_id)

    def _group(
        self,
        rows: Sequence[GrantRow],
        provider_id: int | None,
        *,
        kind: str,
        capability_id: int,
    ) -> list[CapabilityMatch]:
        scoped = provider_id is not None
        status = SupportStatus.PROVIDER_SPECIFIC if scoped else SupportStatus.GLOBAL
        matches = group_by_device(rows, status, keep_provider=scoped)
        logger.debug(
            "Resolved capability support",
            extra={
                "capability": kind,
                "capability_id": capability_id,
                "provider_id": provider_id,
                "rows": len(rows),
                "devices": len(matches),
            },
        )
        return matches


async def hydrate_providers(
    matches: Sequence[CapabilityMatch],
    loader: ProviderLoader,
) -> list[CapabilityResult]:
    """Attach full providers to matches through a batching loader.

    Global matches get ``provider=None``; a provider id the loader cannot
    find also yields None.
    """
    provider_ids = sorted({m.provider_id for m in matches if m.provider_id is not None})
    providers = await loader.load_many(provider_ids) if provider_ids else []
    by_id = dict(zip(provider_ids, providers, strict=True))

    return [
        CapabilityResult(
            device=match.device,
            software=list(match.software),
            support_status=match.support_status,
            provider=by_id.get(match.provider_id) if match.provider_id is not None else None,
        )
        for match in matches
    ]


__all__ = [
    "CapabilityResolver",
    "ProviderLoader",
    "group_by_device",
    "hydrate_providers",
]
