"""Async repository pattern for database access.

Provides a generic base repository with find/insert/replace/delete over one
collection. Verticals subclass it to add domain-specific queries, such as
the dependent lookups used by dependency-checked deletion.

Repositories hand out immutable records (each model's ``to_record()``),
never live ORM rows.
"""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import StoreFailure
from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


def parse_id(item_id: str) -> str:
    """Normalise an identifier; a malformed one is a store failure."""
    try:
        return str(uuid.UUID(str(item_id)))
    except ValueError as e:
        raise StoreFailure(f"Malformed identifier: {item_id!r}", "cast") from e


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository.

    Subclass and set `model` to your SQLAlchemy model::

        class GenreRepository(BaseRepository[Genre]):
            model = Genre
            default_order = "name"
    """

    model: type[ModelT]
    default_order: str | None = None

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- Queries --

    def _filtered(self, stmt, filters: dict[str, Any]):
        for col_name, value in filters.items():
            stmt = stmt.where(getattr(self.model, col_name) == value)
        return stmt

    async def find(self, order_by: str | None = None, **filters: Any) -> list:
        """All records matching equality filters, ordered by a column."""
        stmt = self._filtered(select(self.model), filters)
        order_by = order_by or self.default_order
        if order_by:
            stmt = stmt.order_by(getattr(self.model, order_by))
        result = await self.session.execute(stmt)
        return [row.to_record() for row in result.scalars().all()]

    async def list(self) -> list:
        """Every record in the collection in default order."""
        return await self.find()

    async def find_one(self, **filters: Any):
        """First record matching equality filters, or None."""
        stmt = self._filtered(select(self.model), filters).limit(1)
        result = await self.session.execute(stmt)
        row = result.scalars().first()
        return row.to_record() if row else None

    async def count(self, **filters: Any) -> int:
        """Number of records matching equality filters."""
        stmt = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    # -- Get by ID --

    async def _row(self, item_id: str, refresh: bool = False) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == parse_id(item_id))
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, item_id: str):
        """Get a single record by ID, or None."""
        row = await self._row(item_id)
        return row.to_record() if row else None

    # -- Writes --

    async def _apply(self, item: ModelT, data: dict[str, Any]) -> None:
        """Copy document fields onto a row. Override for relationship fields."""
        for key, value in data.items():
            if key not in ("id", "created_at", "updated_at"):
                setattr(item, key, value)

    async def create(self, data: dict[str, Any]):
        """Insert a new document and return its record."""
        item = self.model()
        await self._apply(item, data)
        self.session.add(item)
        await self.session.flush()
        return (await self._row(item.id, refresh=True)).to_record()

    async def replace(self, item_id: str, data: dict[str, Any]):
        """Replace every document field of an existing row.

        Returns None when no row has this identifier.
        """
        item = await self._row(item_id)
        if item is None:
            return None
        await self._apply(item, data)
        await self.session.flush()
        return (await self._row(item.id, refresh=True)).to_record()

    async def delete(self, item_id: str) -> bool:
        """Delete a row. Returns True if deleted, False if not found."""
        item = await self._row(item_id)
        if item is None:
            return False
        await self.session.delete(item)
        await self.session.flush()
        return True
