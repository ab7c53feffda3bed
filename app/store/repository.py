"""Generic async repository over a single SQLAlchemy model.

Every mutating call commits its own unit of work and then reads the entity
back, so callers always receive the persisted state. SQLAlchemy failures are
rolled back and surfaced as ``StoreError``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions.base import BaseAppException, NotFoundError, StoreError, ValidationError
from models.base import BaseModel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_id(value: Any) -> uuid.UUID | None:
    """Return ``value`` as a UUID, or None when it is empty or not a valid identifier."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class Repository(Generic[ModelT]):
    """CRUD operations for one entity kind."""

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelT],
        not_found_error: type[BaseAppException] = NotFoundError,
    ):
        self.db = db
        self.model = model
        self.not_found_error = not_found_error

    @property
    def entity_name(self) -> str:
        return self.model.__name__.lower()

    async def create(self, **fields: Any) -> ModelT:
        """Insert a new entity and return it as stored."""
        self._check_fields(fields)
        entity = self.model(**fields)
        try:
            self.db.add(entity)
            await self.db.commit()
            await self.db.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to create {self.entity_name}: {str(e)}") from e

    async def find_by_id(self, entity_id: Any) -> ModelT | None:
        """Return the entity with ``entity_id`` or None."""
        key = coerce_id(entity_id)
        if key is None:
            return None
        stmt = select(self.model).where(self.model.id == key)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, entity_id: Any) -> ModelT:
        """Return the entity with ``entity_id`` or raise the repository's not-found error."""
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise self.not_found_error()
        return entity

    async def find_by_field(self, field: str, value: Any) -> ModelT | None:
        """Return the oldest entity whose ``field`` equals ``value`` exactly."""
        column = self._column(field)
        stmt = (
            select(self.model)
            .where(column.is_(None) if value is None else column == value)
            .order_by(self.model.created_at.asc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list(
        self,
        filters: Mapping[str, Any] | None = None,
        order_by: Iterable[Any] | None = None,
        criteria: Iterable[Any] = (),
    ) -> list[ModelT]:
        """List entities matching equality ``filters`` and extra SQL ``criteria``."""
        stmt = select(self.model)
        conditions = self._conditions(filters) + list(criteria)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Mapping[str, Any] | None = None) -> int:
        stmt = select(func.count(self.model.id))
        conditions = self._conditions(filters)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def update(self, entity_id: Any, **fields: Any) -> ModelT:
        """Apply ``fields`` to the entity; fields not supplied are left untouched."""
        self._check_fields(fields)
        entity = await self.get(entity_id)
        for field, value in fields.items():
            setattr(entity, field, value)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to update {self.entity_name}: {str(e)}") from e

        # Read back after the write
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity_id: Any) -> None:
        """Delete the entity; dependent rows are removed by the model cascades."""
        entity = await self.get(entity_id)
        try:
            await self.db.delete(entity)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to delete {self.entity_name}: {str(e)}") from e
        logger.debug("Deleted %s %s", self.entity_name, entity_id)

    async def aggregate_max_order(self, **scope: Any) -> int | None:
        """Return the highest ``order`` among entities in ``scope``, or None when it is empty."""
        stmt = select(func.max(self._column("order")))
        conditions = self._conditions(scope)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self.db.execute(stmt)
        return result.scalar()

    # Private helper methods

    def _column(self, field: str):
        column = getattr(self.model, field, None)
        if column is None or not hasattr(column, "property"):
            raise ValidationError(f"Unknown {self.entity_name} field: {field}")
        return column

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        for field in fields:
            self._column(field)

    def _conditions(self, filters: Mapping[str, Any] | None) -> list:
        conditions = []
        for field, value in (filters or {}).items():
            column = self._column(field)
            conditions.append(column.is_(None) if value is None else column == value)
        return conditions
