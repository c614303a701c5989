"""Minimal generic read repository for SQLAlchemy models.

The capability catalog is written by seeding jobs; the service only reads it,
so the repository offers lookups and listing with explicit session passing.
For anything more involved, subclasses build statements directly.

Example:
    class BandRepository(BaseRepository[Band]):
        def __init__(self) -> None:
            super().__init__(Band)

        async def lte(self, session: AsyncSession) -> Sequence[Band]:
            return await self.list(session, select(Band).where(Band.technology == "LTE"))

    bands = BandRepository()
    band = await bands.get(session, 7)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import Select, func, select

from capability_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Minimal generic repository for read operations.

    Provides:
        - get(session, id) -> T | None
        - get_many(session, ids) -> Sequence[T]
        - list(session, limit, offset) -> Sequence[T]
        - count(session) -> int

    Session is always explicit - no hidden state. Storage errors propagate
    unchanged to the caller.
    """

    __slots__ = ("model", "_lazy")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key.

        Returns:
            Entity if found, None otherwise
        """
        instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_many(self, session: AsyncSession, ids: Iterable[Any]) -> Sequence[T]:
        """Get every entity whose primary key is in ``ids`` with one query.

        The result order is unspecified; missing ids are simply absent.
        """
        id_list = list(ids)
        if not id_list:
            return []
        stmt = select(self.model).where(self._pk_attr().in_(id_list))
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.get_many: {self.model.__name__}({len(id_list)} ids) -> {len(items)} found"
        )
        return items

    async def list(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]] | None = None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[T]:
        """List entities, optionally from a pre-filtered statement.

        Args:
            session: Database session
            statement: Select with filters and ordering applied; defaults to all rows
            limit: Maximum results to return (None for no limit)
            offset: Number of results to skip
        """
        stmt = statement if statement is not None else select(self.model)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(items)} items"
        )
        return items

    async def count(self, session: AsyncSession) -> int:
        """Count all rows of the model's table."""
        stmt = select(func.count()).select_from(self.model)
        total = (await session.execute(stmt)).scalar_one()
        self._lazy.debug(lambda: f"db.count: {self.model.__name__} -> {total}")
        return total

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        return self.model.id  # type: ignore[attr-defined]
