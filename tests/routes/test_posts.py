# tests/routes/test_posts.py
"""Tests for the post routes and their response caching."""

from collections.abc import Callable
from uuid import uuid4

from httpx import AsyncClient
from pytest_mock import MockerFixture

from app.decorators.caching import CACHE_HEADER
from app.managers.response_cache import ResponseCache
from app.models import PostDB, UserDB
from tests.fakes import FakePostRepository, FakeStore

POSTS = "/api/posts"


class TestListPosts:
    """Tests for GET /api/posts."""

    async def test_second_read_is_a_byte_identical_hit(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        mocker: MockerFixture,
    ) -> None:
        make_post()
        make_post()

        list_published = mocker.spy(FakePostRepository, "list_published")

        first = await client.get(POSTS)
        second = await client.get(POSTS)

        assert first.status_code == second.status_code == 200
        assert first.headers[CACHE_HEADER] == "MISS"
        assert second.headers[CACHE_HEADER] == "HIT"
        assert first.content == second.content
        assert list_published.call_count == 1

    async def test_body_shape(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author: UserDB,
    ) -> None:
        make_post(category_id="cat_tech")

        body = (await client.get(POSTS)).json()

        assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}
        (post,) = body["posts"]
        assert post["author"] == {"id": str(author.uuid), "username": author.username}
        assert post["category"]["name"] == "Technology"
        assert post["likeCount"] == 0
        assert "viewCount" in post

    async def test_drafts_are_hidden(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
    ) -> None:
        make_post(published=False)
        body = (await client.get(POSTS)).json()
        assert body["posts"] == []
        assert body["pagination"]["total"] == 0

    async def test_featured_first(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
    ) -> None:
        older_featured = make_post(featured=True)
        make_post()
        body = (await client.get(POSTS)).json()
        assert body["posts"][0]["id"] == str(older_featured.id)

    async def test_title_search_and_pagination(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
    ) -> None:
        for n in range(3):
            make_post(title=f"FastAPI tips {n}", slug=f"fastapi-tips-{n}")
        make_post(title="Gardening", slug="gardening")

        body = (await client.get(POSTS, params={"title": "fastapi", "limit": 2})).json()

        assert len(body["posts"]) == 2
        assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    async def test_invalid_query_is_rejected(self, client: AsyncClient) -> None:
        assert (await client.get(POSTS, params={"page": 0})).status_code == 422
        assert (await client.get(POSTS, params={"limit": 101})).status_code == 422
        assert (await client.get(POSTS, params={"title": ""})).status_code == 422
        assert (await client.get(POSTS, params={"sortBy": "views"})).status_code == 422

    async def test_query_variants_are_cached_separately(
        self,
        client: AsyncClient,
        response_cache: ResponseCache,
    ) -> None:
        await client.get(POSTS, params={"page": 1, "limit": 5})
        await client.get(POSTS, params={"limit": 5, "page": 1})
        await client.get(POSTS, params={"page": 2, "limit": 5})
        assert response_cache.size == 2


class TestGetPost:
    """Tests for GET /api/posts/{slug} and the drafts view."""

    async def test_view_is_counted_on_miss_only(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
    ) -> None:
        post = make_post()

        first = await client.get(f"{POSTS}/{post.slug}")
        second = await client.get(f"{POSTS}/{post.slug}")

        assert first.json()["post"]["viewCount"] == 1
        assert second.headers[CACHE_HEADER] == "HIT"
        assert post.view_count == 1

    async def test_unknown_slug(self, client: AsyncClient) -> None:
        response = await client.get(f"{POSTS}/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found"

    async def test_draft_is_not_public(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
    ) -> None:
        post = make_post(published=False)
        assert (await client.get(f"{POSTS}/{post.slug}")).status_code == 404

    async def test_author_reads_draft(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        post = make_post(published=False)
        response = await client.get(f"{POSTS}/drafts/{post.slug}", headers=author_headers)
        assert response.status_code == 200
        assert response.json()["post"]["published"] is False

    async def test_other_user_cannot_read_draft(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post(published=False)
        response = await client.get(f"{POSTS}/drafts/{post.slug}", headers=reader_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to view this post"


class TestCreatePost:
    """Tests for POST /api/posts."""

    async def test_requires_auth(self, client: AsyncClient) -> None:
        response = await client.post(POSTS, json={"title": "Hi", "content": "There"})
        assert response.status_code == 401

    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.post(
            POSTS,
            json={"title": "Hi", "content": "There"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Could not validate credentials"

    async def test_creates_with_slug_and_tags(
        self,
        client: AsyncClient,
        author_headers: dict[str, str],
        author: UserDB,
    ) -> None:
        response = await client.post(
            POSTS,
            json={
                "title": "Hello, World!",
                "content": "First post",
                "published": True,
                "categoryId": "cat_tech",
                "tags": ["tag_python", "tag_guide"],
            },
            headers=author_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Post created successfully"
        post = body["post"]
        assert post["slug"] == "hello-world"
        assert post["authorId"] == str(author.uuid)
        assert post["likeCount"] == 0
        assert [tag["name"] for tag in post["tags"]] == ["Guide", "Python"]

    async def test_create_invalidates_cached_listing(
        self,
        client: AsyncClient,
        author_headers: dict[str, str],
    ) -> None:
        assert (await client.get(POSTS)).json()["posts"] == []

        await client.post(
            POSTS,
            json={"title": "Fresh", "content": "News", "published": True},
            headers=author_headers,
        )
        response = await client.get(POSTS)

        assert response.headers[CACHE_HEADER] == "MISS"
        assert [p["slug"] for p in response.json()["posts"]] == ["fresh"]

    async def test_create_invalidates_my_posts(
        self,
        client: AsyncClient,
        author_headers: dict[str, str],
    ) -> None:
        await client.get(f"{POSTS}/my-posts", headers=author_headers)
        await client.post(
            POSTS,
            json={"title": "Draft one", "content": "Not yet"},
            headers=author_headers,
        )
        response = await client.get(f"{POSTS}/my-posts", headers=author_headers)

        assert response.headers[CACHE_HEADER] == "MISS"
        assert response.json()["posts"][0]["published"] is False

    async def test_duplicate_title_conflicts(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        make_post(title="Taken", slug="taken")
        response = await client.post(
            POSTS,
            json={"title": "Taken!", "content": "Again"},
            headers=author_headers,
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "A post with this title already exists"

    async def test_unknown_category(
        self,
        client: AsyncClient,
        author_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            POSTS,
            json={"title": "A", "content": "B", "categoryId": "cat_none"},
            headers=author_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Category not found"

    async def test_unknown_tag(self, client: AsyncClient, author_headers: dict[str, str]) -> None:
        response = await client.post(
            POSTS,
            json={"title": "A", "content": "B", "tags": ["tag_python", "tag_none"]},
            headers=author_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Tag not found"

    async def test_title_without_slug_characters(
        self,
        client: AsyncClient,
        author_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            POSTS,
            json={"title": "!!!", "content": "B"},
            headers=author_headers,
        )
        assert response.status_code == 400

    async def test_missing_content(self, client: AsyncClient, author_headers: dict[str, str]) -> None:
        response = await client.post(POSTS, json={"title": "A"}, headers=author_headers)
        assert response.status_code == 422
        assert response.json()["detail"] == "Validation failed"


class TestUpdatePost:
    """Tests for PUT /api/posts/{id}."""

    async def test_new_title_moves_slug_and_drops_old_entry(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        post = make_post(title="Old title", slug="old-title")
        assert (await client.get(f"{POSTS}/old-title")).status_code == 200

        response = await client.put(
            f"{POSTS}/{post.id}",
            json={"title": "New title"},
            headers=author_headers,
        )

        assert response.status_code == 200
        assert response.json()["post"]["slug"] == "new-title"
        assert (await client.get(f"{POSTS}/old-title")).status_code == 404
        assert (await client.get(f"{POSTS}/new-title")).status_code == 200

    async def test_update_refreshes_cached_listing(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        post = make_post()
        await client.get(POSTS)
        await client.put(f"{POSTS}/{post.id}", json={"content": "Edited"}, headers=author_headers)

        response = await client.get(POSTS)

        assert response.headers[CACHE_HEADER] == "MISS"
        assert response.json()["posts"][0]["content"] == "Edited"

    async def test_null_required_field_is_ignored(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        post = make_post(title="Keep me", slug="keep-me")
        response = await client.put(
            f"{POSTS}/{post.id}",
            json={"title": None, "categoryId": "cat_life"},
            headers=author_headers,
        )
        body = response.json()["post"]
        assert body["title"] == "Keep me"
        assert body["categoryId"] == "cat_life"

    async def test_tags_replace_the_set(
        self,
        client: AsyncClient,
        store: FakeStore,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        post = make_post()
        store.post_tags.append((post.id, "tag_python"))
        response = await client.put(
            f"{POSTS}/{post.id}",
            json={"tags": ["tag_news"]},
            headers=author_headers,
        )
        assert [tag["id"] for tag in response.json()["post"]["tags"]] == ["tag_news"]

    async def test_only_author_may_update(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()
        response = await client.put(
            f"{POSTS}/{post.id}",
            json={"content": "Mine now"},
            headers=reader_headers,
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to update this post"

    async def test_title_collision(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        make_post(title="Taken", slug="taken")
        post = make_post()
        response = await client.put(
            f"{POSTS}/{post.id}",
            json={"title": "Taken"},
            headers=author_headers,
        )
        assert response.status_code == 409

    async def test_unknown_post(self, client: AsyncClient, author_headers: dict[str, str]) -> None:
        response = await client.put(
            f"{POSTS}/{uuid4()}",
            json={"content": "x"},
            headers=author_headers,
        )
        assert response.status_code == 404


class TestDeletePost:
    """Tests for DELETE /api/posts/{id}."""

    async def test_delete_drops_cached_reads(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
    ) -> None:
        post = make_post()
        await client.get(POSTS)
        await client.get(f"{POSTS}/{post.slug}")

        response = await client.delete(f"{POSTS}/{post.id}", headers=author_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Post deleted successfully"}
        assert (await client.get(f"{POSTS}/{post.slug}")).status_code == 404
        assert (await client.get(POSTS)).json()["posts"] == []

    async def test_only_author_may_delete(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()
        response = await client.delete(f"{POSTS}/{post.id}", headers=reader_headers)
        assert response.status_code == 403


class TestLikesAndSaves:
    """Tests for the like and save endpoints."""

    async def test_like_then_unlike(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()

        liked = await client.post(f"{POSTS}/{post.id}/like", headers=reader_headers)
        assert liked.status_code == 201
        assert liked.json() == {"message": "Post liked successfully", "likeCount": 1}

        again = await client.post(f"{POSTS}/{post.id}/like", headers=reader_headers)
        assert again.status_code == 400
        assert again.json()["detail"] == "You have already liked this post"

        unliked = await client.delete(f"{POSTS}/{post.id}/like", headers=reader_headers)
        assert unliked.json() == {"message": "Post unliked successfully", "likeCount": 0}

        missing = await client.delete(f"{POSTS}/{post.id}/like", headers=reader_headers)
        assert missing.json()["detail"] == "You have not liked this post"

    async def test_like_refreshes_cached_post(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()
        await client.get(f"{POSTS}/{post.slug}")
        await client.post(f"{POSTS}/{post.id}/like", headers=reader_headers)

        response = await client.get(f"{POSTS}/{post.slug}")

        assert response.headers[CACHE_HEADER] == "MISS"
        assert response.json()["post"]["likeCount"] == 1

    async def test_like_unknown_post(
        self,
        client: AsyncClient,
        reader_headers: dict[str, str],
    ) -> None:
        response = await client.post(f"{POSTS}/{uuid4()}/like", headers=reader_headers)
        assert response.status_code == 404

    async def test_save_and_list_saved(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()
        assert (await client.get(f"{POSTS}/saved", headers=reader_headers)).json()["posts"] == []

        saved = await client.post(f"{POSTS}/{post.id}/save", headers=reader_headers)
        assert saved.status_code == 201
        assert saved.json() == {"message": "Post saved successfully"}

        listing = await client.get(f"{POSTS}/saved", headers=reader_headers)
        assert listing.headers[CACHE_HEADER] == "MISS"
        (entry,) = listing.json()["posts"]
        assert entry["id"] == str(post.id)
        assert "savedAt" in entry

        duplicate = await client.post(f"{POSTS}/{post.id}/save", headers=reader_headers)
        assert duplicate.json()["detail"] == "You have already saved this post"

    async def test_unsave(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()
        await client.post(f"{POSTS}/{post.id}/save", headers=reader_headers)
        response = await client.delete(f"{POSTS}/{post.id}/save", headers=reader_headers)
        assert response.json() == {"message": "Post unsaved successfully"}

        again = await client.delete(f"{POSTS}/{post.id}/save", headers=reader_headers)
        assert again.status_code == 400
        assert again.json()["detail"] == "You have not saved this post"

    async def test_saved_listing_is_per_user(
        self,
        client: AsyncClient,
        make_post: Callable[..., PostDB],
        author_headers: dict[str, str],
        reader_headers: dict[str, str],
    ) -> None:
        post = make_post()
        await client.post(f"{POSTS}/{post.id}/save", headers=reader_headers)

        mine = await client.get(f"{POSTS}/saved", headers=author_headers)
        theirs = await client.get(f"{POSTS}/saved", headers=reader_headers)

        assert mine.json()["posts"] == []
        assert len(theirs.json()["posts"]) == 1
