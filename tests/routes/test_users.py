# tests/routes/test_users.py
"""Tests for the follow routes."""

from uuid import uuid4

from httpx import AsyncClient

from app.managers.response_cache import ResponseCache
from app.models import UserDB
from app.utils.cache_keys import build_cache_key
from tests.fakes import FakeStore

USERS = "/api/users"


class TestFollow:
    """Tests for following and unfollowing."""

    async def test_follow_and_unfollow(
        self,
        client: AsyncClient,
        store: FakeStore,
        author: UserDB,
        reader: UserDB,
        reader_headers: dict[str, str],
    ) -> None:
        followed = await client.post(f"{USERS}/{author.uuid}/follow", headers=reader_headers)
        assert followed.status_code == 201
        assert followed.json() == {
            "message": "Successfully followed user",
            "followingId": str(author.uuid),
        }
        assert (reader.uuid, author.uuid) in store.follows

        unfollowed = await client.delete(f"{USERS}/{author.uuid}/follow", headers=reader_headers)
        assert unfollowed.status_code == 200
        assert unfollowed.json()["message"] == "Successfully unfollowed user"
        assert store.follows == {}

    async def test_cannot_follow_self(
        self,
        client: AsyncClient,
        author: UserDB,
        author_headers: dict[str, str],
    ) -> None:
        response = await client.post(f"{USERS}/{author.uuid}/follow", headers=author_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot follow yourself"

    async def test_follow_unknown_user(
        self,
        client: AsyncClient,
        reader_headers: dict[str, str],
    ) -> None:
        response = await client.post(f"{USERS}/{uuid4()}/follow", headers=reader_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    async def test_follow_twice(
        self,
        client: AsyncClient,
        author: UserDB,
        reader_headers: dict[str, str],
    ) -> None:
        await client.post(f"{USERS}/{author.uuid}/follow", headers=reader_headers)
        response = await client.post(f"{USERS}/{author.uuid}/follow", headers=reader_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Already following this user"

    async def test_unfollow_without_follow(
        self,
        client: AsyncClient,
        author: UserDB,
        reader_headers: dict[str, str],
    ) -> None:
        response = await client.delete(f"{USERS}/{author.uuid}/follow", headers=reader_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Not following this user"

    async def test_follow_drops_followers_cached_entries(
        self,
        client: AsyncClient,
        response_cache: ResponseCache,
        author: UserDB,
        reader: UserDB,
        reader_headers: dict[str, str],
    ) -> None:
        key = build_cache_key("/api/posts/my-posts", reader.uuid)
        response_cache.set_payload(key, "{}")

        await client.post(f"{USERS}/{author.uuid}/follow", headers=reader_headers)

        assert response_cache.get_payload(key) is None


class TestFollowListings:
    """Tests for the followers and following listings."""

    async def test_listings(
        self,
        client: AsyncClient,
        author: UserDB,
        reader: UserDB,
        reader_headers: dict[str, str],
    ) -> None:
        await client.post(f"{USERS}/{author.uuid}/follow", headers=reader_headers)

        followers = (await client.get(f"{USERS}/{author.uuid}/followers")).json()
        assert followers["total"] == 1
        assert followers["page"] == 1
        assert followers["limit"] == 20
        (entry,) = followers["followers"]
        assert entry["id"] == str(reader.uuid)
        assert entry["username"] == reader.username
        assert "createdAt" in entry

        following = (await client.get(f"{USERS}/{reader.uuid}/following")).json()
        assert [u["id"] for u in following["following"]] == [str(author.uuid)]

    async def test_empty_listing(self, client: AsyncClient, author: UserDB) -> None:
        body = (await client.get(f"{USERS}/{author.uuid}/followers", params={"limit": 5})).json()
        assert body == {"followers": [], "total": 0, "page": 1, "limit": 5}

    async def test_invalid_page(self, client: AsyncClient, author: UserDB) -> None:
        response = await client.get(f"{USERS}/{author.uuid}/following", params={"page": 0})
        assert response.status_code == 422
