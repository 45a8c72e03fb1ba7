"""Base repository for database operations."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Generic, TypeAlias, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
)

FilterValue: TypeAlias = str | int | float | bool | UUID | datetime | None

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common persistence operations.

    Subclasses set ``model`` (and ``id_field`` when the primary key is not
    called ``id``). Writes are flushed, not committed: the request-scoped
    session commits through ``commit()`` or when the request ends.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, record_id: UUID | str) -> ModelT | None:
        """
        Get a record by its primary key.

        Args:
            record_id: Primary key value

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(self.model).where(id_column == record_id))
        return result.scalar_one_or_none()

    async def get_by_field(self, field_name: str, value: FilterValue) -> ModelT | None:
        field = getattr(self.model, field_name)
        result = await self.session.execute(select(self.model).where(field == value))
        return result.scalar_one_or_none()

    async def get_many(self, record_ids: Iterable[UUID | str]) -> dict[Any, ModelT]:
        """
        Load several records at once.

        Args:
            record_ids: Primary keys to load. Unknown ids are skipped.

        Returns:
            dict: Records keyed by primary key.
        """
        ids = set(record_ids)
        if not ids:
            return {}
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(self.model).where(id_column.in_(ids)))
        return {getattr(record, self.id_field): record for record in result.scalars().all()}

    async def exists(self, record_id: UUID | str) -> bool:
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(1).where(id_column == record_id).limit(1))
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar() or 0

    async def delete(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    async def commit(self) -> None:
        """
        Commit the request's unit of work.

        Mutating services commit before returning so cache invalidation
        that follows never races a pending transaction.
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise self._integrity_error(e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to commit: {e}") from e

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            raise self._integrity_error(e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e
        return record

    @staticmethod
    def _integrity_error(e: IntegrityError) -> DatabaseError:
        error_msg = str(e.orig) if e.orig else str(e)
        if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
            return DuplicateEntryError(detail=error_msg)
        return DatabaseError(detail=f"Database integrity error: {error_msg}")
