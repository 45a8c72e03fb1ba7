"""Authentication service: signup, login and the profile of the current user."""

from logging import getLogger

from app.configs import file_logger
from app.errors.auth import InvalidCredentialsError, UserAlreadyExistsError
from app.managers.password_manager import hash_password, verify_and_update_password
from app.managers.token_manager import create_access_token
from app.models import UserDB
from app.repositories import PostRepository, UserRepository
from app.schemas.auth import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    ProfileResponse,
    ProfileUser,
    SignupRequest,
)

logger = file_logger(getLogger(__name__))


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, user_repo: UserRepository, post_repo: PostRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
            post_repo: Post repository, used for the profile post count
        """
        self.user_repo = user_repo
        self.post_repo = post_repo

    @staticmethod
    def _auth_response(message: str, user: UserDB) -> AuthResponse:
        return AuthResponse(
            message=message,
            user=AuthUser(id=user.uuid, email=user.email, username=user.username),
            token=create_access_token(user_id=user.uuid, username=user.username),
        )

    async def signup(self, data: SignupRequest) -> AuthResponse:
        """
        Register a new user and issue a token.

        Args:
            data: Validated signup body

        Returns:
            AuthResponse: The new user and an access token

        Raises:
            UserAlreadyExistsError: If the email or username is taken
        """
        if await self.user_repo.get_by_email(data.email):
            raise UserAlreadyExistsError("Email already registered")
        if await self.user_repo.get_by_username(data.username):
            raise UserAlreadyExistsError("Username already taken")

        user = await self.user_repo.create(
            email=data.email,
            username=data.username,
            password_hash=await hash_password(data.password),
        )
        await self.user_repo.commit()
        logger.info(f"User {user.uuid} signed up")
        return self._auth_response("User created successfully", user)

    async def login(self, data: LoginRequest) -> AuthResponse:
        """
        Check credentials and issue a token.

        A stored hash with outdated parameters is replaced on success.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = await self.user_repo.get_by_email(data.email)
        is_valid, new_hash = await verify_and_update_password(
            data.password,
            user.password_hash if user else None,
        )
        if not user or not is_valid:
            raise InvalidCredentialsError

        if new_hash:
            await self.user_repo.update_password_hash(user, new_hash)
            await self.user_repo.commit()
            logger.info(f"Password hash upgraded for user {user.uuid}")

        return self._auth_response("Login successful", user)

    async def profile(self, user: UserDB) -> ProfileResponse:
        return ProfileResponse(
            user=ProfileUser(
                id=user.uuid,
                email=user.email,
                username=user.username,
                created_at=user.created_at,
                post_count=await self.post_repo.count_by_author(user.uuid),
            ),
        )
