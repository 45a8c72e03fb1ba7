"""Category and tag repositories."""

from collections.abc import Iterable, Sequence
from logging import getLogger

from sqlalchemy import select

from app.configs import file_logger
from app.models.taxonomy import CategoryDB, TagDB
from app.repositories.base import BaseRepository

logger = file_logger(getLogger(__name__))


class CategoryRepository(BaseRepository[CategoryDB]):
    model = CategoryDB

    async def list_all(self) -> list[CategoryDB]:
        result = await self.session.execute(select(CategoryDB).order_by(CategoryDB.name))
        return list(result.scalars().all())

    async def seed(self, categories: Sequence[tuple[str, str, str]]) -> int:
        """
        Insert missing categories.

        Args:
            categories: (id, name, slug) tuples. Existing ids are left alone.

        Returns:
            int: Number of categories inserted.
        """
        existing = await self.get_many(category_id for category_id, _, _ in categories)
        created = 0
        for category_id, name, slug in categories:
            if category_id in existing:
                continue
            self.session.add(CategoryDB(id=category_id, name=name, slug=slug))
            created += 1
        await self.session.flush()
        logger.info(f"Seeded {created} categories")
        return created


class TagRepository(BaseRepository[TagDB]):
    model = TagDB

    async def search(self, term: str | None = None) -> list[TagDB]:
        """Tags ordered by name, optionally filtered by a case-insensitive substring."""
        statement = select(TagDB).order_by(TagDB.name)
        if term:
            statement = statement.where(TagDB.name.ilike(f"%{term}%"))  # type: ignore[attr-defined]
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def existing_ids(self, tag_ids: Iterable[str]) -> set[str]:
        return set(await self.get_many(tag_ids))

    async def seed(self, tags: Sequence[tuple[str, str]]) -> int:
        """Insert missing (id, name) tags and return how many were added."""
        existing = await self.get_many(tag_id for tag_id, _ in tags)
        created = 0
        for tag_id, name in tags:
            if tag_id in existing:
                continue
            self.session.add(TagDB(id=tag_id, name=name))
            created += 1
        await self.session.flush()
        logger.info(f"Seeded {created} tags")
        return created
