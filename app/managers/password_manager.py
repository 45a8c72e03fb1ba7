"""
Password hashing for user accounts.

Argon2id through passlib's ``CryptContext``. Hashing is CPU bound, so the
async helpers at the bottom of this module run it in a small thread pool
instead of on the event loop.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.configs import CONFIG_MAP, settings
from app.decorators.with_retry import with_retry
from app.errors import PasswordHashingError, PasswordRehashError
from app.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="password-hasher")
logger = get_logger(__name__)


class PasswordHasher:
    """
    Hash and verify account passwords.

    ``pbkdf2_sha256`` stays readable but is marked deprecated, so
    ``verify_and_update`` hands back an Argon2id replacement when an old hash
    verifies.
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        cost = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=cost.memory_cost,
            argon2__time_cost=cost.time_cost,
            argon2__parallelism=cost.parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Args:
            password: The plaintext password.

        Returns:
            str: The Argon2id hash.

        Raises:
            ValueError: If the password is empty.
            PasswordHashingError: If the backend fails.
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def verify_and_update(
        self,
        password: str,
        hashed_password: str | None,
    ) -> tuple[bool, str | None]:
        """
        Verify a password and return a fresh hash when the stored one is stale.

        Args:
            password: The plaintext password.
            hashed_password: The stored hash, or None for an unknown account.

        Returns:
            tuple[bool, str | None]: Whether the password matched, and a
            replacement hash if the stored one needs upgrading.
        """
        if hashed_password is None:
            # keeps timing equal for unknown accounts
            self.pwd_context.dummy_verify()
            return False, None

        if not self.verify(password, hashed_password):
            return False, None

        if not self.pwd_context.needs_update(hashed_password):
            return True, None

        try:
            new_hash = self.hash(password)
        except PasswordHashingError as e:
            mssg = "Failed to rehash password"
            raise PasswordRehashError(mssg) from e
        logger.info(f"Password rehashed on level {self.level}")
        return True, new_hash


_default_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return _default_hasher


@with_retry((PasswordHashingError,), base_delay=1, max_delay=10)
async def hash_password(password: str) -> str:
    """Hash ``password`` off the event loop."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str) -> bool:
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )


@with_retry((PasswordRehashError,), base_delay=1, max_delay=10)
async def verify_and_update_password(
    password: str,
    hashed_password: str | None,
) -> tuple[bool, str | None]:
    """
    Verify ``password`` off the event loop.

    Args:
        password: The plaintext password.
        hashed_password: The stored hash (can be None).

    Returns:
        tuple[bool, str | None]: Verification result and new hash if needed.
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )
