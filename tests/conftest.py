# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the app is imported anywhere
os.environ["LOG_TO_FILE"] = "false"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SEED_DEFAULTS"] = "false"

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.configs import CacheConfig
from app.dependencies import (
    get_category_repository,
    get_comment_repository,
    get_engagement_repository,
    get_follow_repository,
    get_post_repository,
    get_tag_repository,
    get_user_repository,
)
from app.main import app
from app.managers.rate_limiter import limiter
from app.managers.response_cache import ResponseCache
from app.managers.token_manager import create_access_token
from app.models import CategoryDB, PostDB, TagDB, UserDB
from tests.fakes import (
    FakeCategoryRepository,
    FakeCommentRepository,
    FakeEngagementRepository,
    FakeFollowRepository,
    FakePostRepository,
    FakeStore,
    FakeTagRepository,
    FakeUserRepository,
)

DUMMY_HASH = "$argon2id$v=19$m=8192,t=1,p=1$c29tZXNhbHQ$somehash"


@pytest.fixture
def store() -> FakeStore:
    """Empty in-memory store with two categories and three tags."""
    store = FakeStore()
    for category_id, name, slug in (
        ("cat_tech", "Technology", "technology"),
        ("cat_life", "Lifestyle", "lifestyle"),
    ):
        store.categories[category_id] = CategoryDB(id=category_id, name=name, slug=slug)
    for tag_id, name in (
        ("tag_python", "Python"),
        ("tag_guide", "Guide"),
        ("tag_news", "News"),
    ):
        store.tags[tag_id] = TagDB(id=tag_id, name=name)
    return store


@pytest.fixture
def author(store: FakeStore) -> UserDB:
    """A user who writes posts."""
    user = UserDB(username="ada_l", email="ada@example.com", password_hash=DUMMY_HASH)
    store.users[user.uuid] = user
    return user


@pytest.fixture
def reader(store: FakeStore) -> UserDB:
    """A second user who reads, likes and comments."""
    user = UserDB(username="grace_h", email="grace@example.com", password_hash=DUMMY_HASH)
    store.users[user.uuid] = user
    return user


def bearer(user: UserDB) -> dict[str, str]:
    """Authorization header carrying a fresh token for ``user``."""
    token = create_access_token(
        user_id=user.uuid,
        username=user.username,
        expires_delta=timedelta(minutes=30),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def author_headers(author: UserDB) -> dict[str, str]:
    return bearer(author)


@pytest.fixture
def reader_headers(reader: UserDB) -> dict[str, str]:
    return bearer(reader)


@pytest.fixture
def make_post(store: FakeStore, author: UserDB) -> Callable[..., PostDB]:
    """Factory that stores a published post by ``author`` unless told otherwise."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> PostDB:  # noqa: ANN401
        n = next(counter)
        created_at = datetime(2025, 1, 1, tzinfo=UTC) + timedelta(minutes=n)
        fields: dict[str, Any] = {
            "title": f"Post number {n}",
            "slug": f"post-number-{n}",
            "content": "Body text",
            "published": True,
            "author_id": author.uuid,
            "created_at": created_at,
            "updated_at": created_at,
        }
        fields.update(overrides)
        post = PostDB(**fields)
        store.posts[post.id] = post
        return post

    return _make


def _provider(fake: type, store: FakeStore) -> Callable[[], Any]:
    def provide() -> Any:  # noqa: ANN401
        return fake(store)

    return provide


@pytest.fixture
def response_cache() -> ResponseCache:
    """Response cache for the ``/api/posts`` collection, started empty."""
    return ResponseCache(config=CacheConfig(), resource_prefix="/api/posts")


@pytest.fixture
async def client(
    store: FakeStore,
    response_cache: ResponseCache,
) -> AsyncGenerator[AsyncClient]:
    """Async client for the app with repositories backed by ``store``."""
    overrides = {
        get_user_repository: FakeUserRepository,
        get_post_repository: FakePostRepository,
        get_comment_repository: FakeCommentRepository,
        get_engagement_repository: FakeEngagementRepository,
        get_follow_repository: FakeFollowRepository,
        get_category_repository: FakeCategoryRepository,
        get_tag_repository: FakeTagRepository,
    }
    for dependency, fake in overrides.items():
        app.dependency_overrides[dependency] = _provider(fake, store)

    app.state.response_cache = response_cache
    limiter.enabled = False

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    limiter.enabled = True
    app.dependency_overrides.clear()
    del app.state.response_cache
