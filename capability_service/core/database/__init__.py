"""Core database package: declarative base, mixins and the read repository.

Example:
    from capability_service.core.database import BaseRepository
    from capability_service.features.capabilities.models import Device

    devices = BaseRepository(Device)
    device = await devices.get(session, device_id)
"""

from __future__ import annotations

from capability_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    IntegerPKMixin,
    TimestampMixin,
)
from capability_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "TimestampMixin",
]
