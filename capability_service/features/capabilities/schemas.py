"""Value types produced by the capability repositories and resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from capability_service.features.capabilities.models import Device, Provider, Software


class SupportStatus(StrEnum):
    """Whether a capability was granted globally or by one provider."""

    GLOBAL = "global"
    PROVIDER_SPECIFIC = "provider-specific"


class GrantRow(NamedTuple):
    """One distinct (device, software[, provider]) row from a grant table."""

    device: Device
    software: Software
    provider_id: int | None = None


class AssignedCapability(NamedTuple):
    """A band, combo or feature granted to a device/software pair.

    ``provider_id`` is None for rows read from a global grant table.
    """

    device_id: int
    software_id: int
    provider_id: int | None
    capability: Any


@dataclass(slots=True)
class CapabilityMatch:
    """Devices supporting a capability, before provider hydration.

    Attributes:
        device: Supporting device.
        software: Distinct software builds of the device carrying the grant,
            in first-seen order.
        support_status: Global or provider-specific.
        provider_id: Granting provider; None for global support.
    """

    device: Device
    support_status: SupportStatus
    provider_id: int | None = None
    software: list[Software] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class CapabilityResult:
    """A :class:`CapabilityMatch` with its provider loaded."""

    device: Device
    software: list[Software]
    support_status: SupportStatus
    provider: Provider | None = None
