# tests/routes/test_auth.py
"""Tests for the signup, login and profile routes."""

from collections.abc import Callable

from httpx import AsyncClient

from app.managers.token_manager import decode_access_token
from app.models import PostDB, UserDB
from tests.fakes import FakeStore

AUTH = "/api/auth"
SIGNUP = {"email": "new@example.com", "username": "new_user", "password": "Sup3rSecret"}


class TestSignup:
    """Tests for POST /api/auth/signup."""

    async def test_signup_returns_user_and_token(
        self,
        client: AsyncClient,
        store: FakeStore,
    ) -> None:
        response = await client.post(f"{AUTH}/signup", json=SIGNUP)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["username"] == "new_user"
        token_data = decode_access_token(body["token"])
        assert token_data is not None
        assert str(token_data.user_id) == body["user"]["id"]

        (user,) = store.users.values()
        assert user.password_hash.startswith("$argon2")
        assert user.password_hash != SIGNUP["password"]

    async def test_duplicate_email(self, client: AsyncClient, author: UserDB) -> None:
        response = await client.post(f"{AUTH}/signup", json={**SIGNUP, "email": author.email})
        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    async def test_duplicate_username(self, client: AsyncClient, author: UserDB) -> None:
        response = await client.post(
            f"{AUTH}/signup",
            json={**SIGNUP, "username": author.username},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Username already taken"

    async def test_weak_password(self, client: AsyncClient) -> None:
        response = await client.post(f"{AUTH}/signup", json={**SIGNUP, "password": "alllowercase1"})
        assert response.status_code == 422

    async def test_invalid_username(self, client: AsyncClient) -> None:
        response = await client.post(f"{AUTH}/signup", json={**SIGNUP, "username": "no spaces"})
        assert response.status_code == 422


class TestLogin:
    """Tests for POST /api/auth/login."""

    async def test_login_after_signup(self, client: AsyncClient) -> None:
        await client.post(f"{AUTH}/signup", json=SIGNUP)

        response = await client.post(
            f"{AUTH}/login",
            json={"email": SIGNUP["email"], "password": SIGNUP["password"]},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert decode_access_token(response.json()["token"]) is not None

    async def test_wrong_password(self, client: AsyncClient) -> None:
        await client.post(f"{AUTH}/signup", json=SIGNUP)
        response = await client.post(
            f"{AUTH}/login",
            json={"email": SIGNUP["email"], "password": "Wr0ngPassword"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    async def test_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{AUTH}/login",
            json={"email": "ghost@example.com", "password": "Whatever1"},
        )
        assert response.status_code == 401


class TestProfile:
    """Tests for GET /api/auth/profile."""

    async def test_profile_counts_posts(
        self,
        client: AsyncClient,
        author: UserDB,
        author_headers: dict[str, str],
        make_post: Callable[..., PostDB],
    ) -> None:
        make_post()
        make_post(published=False)

        response = await client.get(f"{AUTH}/profile", headers=author_headers)

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == str(author.uuid)
        assert user["email"] == author.email
        assert user["postCount"] == 2
        assert "createdAt" in user

    async def test_profile_requires_auth(self, client: AsyncClient) -> None:
        assert (await client.get(f"{AUTH}/profile")).status_code == 401

    async def test_token_of_deleted_user(
        self,
        client: AsyncClient,
        store: FakeStore,
        author: UserDB,
        author_headers: dict[str, str],
    ) -> None:
        del store.users[author.uuid]
        response = await client.get(f"{AUTH}/profile", headers=author_headers)
        assert response.status_code == 401
        assert response.json()["detail"] == "User not found"
