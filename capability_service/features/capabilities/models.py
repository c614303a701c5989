"""SQLAlchemy models for the device capability catalog.

Entities (devices, software builds, bands, combos, features, providers) are
ordinary mapped classes. Capability grants are plain association tables: a
row asserts that a (device, software[, provider]) tuple supports a band,
combo or feature. Global and provider-specific grants live in separate
tables and are independent facts.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from capability_service.core.database import Base, IntegerPKMixin, TimestampMixin

BAND_TECHNOLOGIES = ("GSM", "HSPA", "LTE", "NR")
COMBO_TECHNOLOGIES = ("LTE CA", "EN-DC", "NR CA")


def _fk(column: str, target: str) -> Column:
    return Column(
        column,
        Integer,
        ForeignKey(target, ondelete="CASCADE"),
        primary_key=True,
    )


class Provider(Base, IntegerPKMixin):
    """Network provider (carrier)."""

    __tablename__ = "provider"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    network_type: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<Provider(id={self.id}, name={self.name!r})>"


class Feature(Base, IntegerPKMixin, TimestampMixin):
    """Named device feature such as VoLTE or VoNR."""

    __tablename__ = "feature"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Feature(id={self.id}, name={self.name!r})>"


class Band(Base, IntegerPKMixin):
    """Radio band, e.g. LTE band 7 or NR band n77."""

    __tablename__ = "band"

    band_number: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="Band designation such as '7' or 'n77'"
    )
    technology: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="GSM | HSPA | LTE | NR"
    )
    dl_band_class: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ul_band_class: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<Band(id={self.id}, technology={self.technology!r}, band_number={self.band_number!r})>"


combo_band = Table(
    "combo_band",
    Base.metadata,
    _fk("combo_id", "combo.id"),
    _fk("band_id", "band.id"),
    Column("position", Integer, nullable=False, default=0),
    Index("idx_combo_band_position", "combo_id", "position"),
)


class Combo(Base, IntegerPKMixin):
    """Carrier-aggregation or dual-connectivity combination of bands."""

    __tablename__ = "combo"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    technology: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="LTE CA | EN-DC | NR CA"
    )

    def __repr__(self) -> str:
        return f"<Combo(id={self.id}, name={self.name!r})>"


class Device(Base, IntegerPKMixin, TimestampMixin):
    """Mobile device model."""

    __tablename__ = "device"

    vendor: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    model_num: Mapped[str] = mapped_column(String(100), nullable=False)
    market_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)

    software: Mapped[list[Software]] = relationship(
        back_populates="device",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Device(id={self.id}, vendor={self.vendor!r}, model_num={self.model_num!r})>"


class Software(Base, IntegerPKMixin, TimestampMixin):
    """Software build shipped on exactly one device."""

    __tablename__ = "software"
    __table_args__ = (Index("idx_software_device", "device_id"),)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    ptcrb: Mapped[int | None] = mapped_column(Integer, nullable=True)
    svn: Mapped[int | None] = mapped_column(Integer, nullable=True)
    build_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    device_id: Mapped[int] = mapped_column(
        ForeignKey("device.id", ondelete="CASCADE"), nullable=False
    )

    device: Mapped[Device] = relationship(back_populates="software", lazy="raise")

    def __repr__(self) -> str:
        return f"<Software(id={self.id}, name={self.name!r}, device_id={self.device_id})>"


# Capability grants

device_software_band = Table(
    "device_software_band",
    Base.metadata,
    _fk("device_id", "device.id"),
    _fk("software_id", "software.id"),
    _fk("band_id", "band.id"),
    Index("idx_dsb_device_software", "device_id", "software_id"),
    Index("idx_dsb_band_lookup", "band_id"),
)

provider_device_software_band = Table(
    "provider_device_software_band",
    Base.metadata,
    _fk("provider_id", "provider.id"),
    _fk("device_id", "device.id"),
    _fk("software_id", "software.id"),
    _fk("band_id", "band.id"),
    Index("idx_pdsb_provider_lookup", "provider_id", "band_id"),
    Index("idx_pdsb_device_software", "device_id", "software_id"),
)

device_software_combo = Table(
    "device_software_combo",
    Base.metadata,
    _fk("device_id", "device.id"),
    _fk("software_id", "software.id"),
    _fk("combo_id", "combo.id"),
    Index("idx_dsc_device_software", "device_id", "software_id"),
    Index("idx_dsc_combo_lookup", "combo_id"),
)

provider_device_software_combo = Table(
    "provider_device_software_combo",
    Base.metadata,
    _fk("provider_id", "provider.id"),
    _fk("device_id", "device.id"),
    _fk("software_id", "software.id"),
    _fk("combo_id", "combo.id"),
    Index("idx_pdsc_provider_lookup", "provider_id", "combo_id"),
    Index("idx_pdsc_device_software", "device_id", "software_id"),
)

device_software_provider_feature = Table(
    "device_software_provider_feature",
    Base.metadata,
    _fk("device_id", "device.id"),
    _fk("software_id", "software.id"),
    _fk("provider_id", "provider.id"),
    _fk("feature_id", "feature.id"),
    Index("idx_dspf_feature_lookup", "feature_id"),
)

__all__ = [
    "BAND_TECHNOLOGIES",
    "COMBO_TECHNOLOGIES",
    "Band",
    "Combo",
    "Device",
    "Feature",
    "Provider",
    "Software",
    "combo_band",
    "device_software_band",
    "device_software_combo",
    "device_software_provider_feature",
    "provider_device_software_band",
    "provider_device_software_combo",
]
