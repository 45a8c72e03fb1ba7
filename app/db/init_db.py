"""
Database initialization and seeding.

Creates the tables and inserts the predefined categories and tags. Runs on
application startup and can also be run directly:

    python -m app.db.init_db
"""

from asyncio import run as asyncio_run
from logging import getLogger

from app.configs import file_logger
from app.db.database import close_db, init_db, transaction
from app.errors.database import DatabaseError, DatabaseInitializationError
from app.repositories.taxonomy import CategoryRepository, TagRepository

logger = file_logger(getLogger(__name__))

# (id, name, slug)
DEFAULT_CATEGORIES: tuple[tuple[str, str, str], ...] = (
    ("cat_tech", "Technology", "technology"),
    ("cat_tutorial", "Tutorial", "tutorial"),
    ("cat_lifestyle", "Lifestyle", "lifestyle"),
    ("cat_review", "Review", "review"),
    ("cat_news", "News", "news"),
    ("cat_opinion", "Opinion", "opinion"),
    ("cat_tips", "Tips & Tricks", "tips-tricks"),
)

# (id, name)
DEFAULT_TAGS: tuple[tuple[str, str], ...] = (
    ("tag_tech", "technology"),
    ("tag_tutorial", "tutorial"),
    ("tag_news", "news"),
    ("tag_tips", "tips"),
    ("tag_review", "review"),
    ("tag_guide", "guide"),
    ("tag_howto", "how-to"),
    ("tag_programming", "programming"),
    ("tag_design", "design"),
    ("tag_business", "business"),
    ("tag_lifestyle", "lifestyle"),
    ("tag_personal", "personal"),
)


async def seed_defaults() -> tuple[int, int]:
    """
    Insert the predefined categories and tags that are missing.

    Returns:
        Number of categories and tags inserted.
    """
    async with transaction() as session:
        categories = await CategoryRepository(session).seed(DEFAULT_CATEGORIES)
        tags = await TagRepository(session).seed(DEFAULT_TAGS)
    if categories or tags:
        logger.info(f"Seeded {categories} categories and {tags} tags")
    return categories, tags


async def main() -> None:
    """Create tables and seed defaults."""
    try:
        logger.info("Initializing database...")
        await init_db()
        await seed_defaults()
        logger.info("Database ready!")
    except DatabaseError as e:
        logger.exception("Failed to initialize database")
        raise DatabaseInitializationError from e
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio_run(main())
