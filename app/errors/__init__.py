from app.errors.auth import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserAuthenticationError,
    auth_exception_handler,
)
from app.errors.base import (
    BASE_EXCEPTION,
    BaseAppError,
    create_exception_handler,
    create_internal_error_handler,
)
from app.errors.blog import (
    BlogError,
    DuplicateActionError,
    ForbiddenError,
    ThreadDepthExceededError,
    ValidationFailedError,
    blog_exception_handler,
)
from app.errors.cache import (
    CacheDeserializationError,
    CacheExceptionError,
    CacheSerializationError,
    cache_exception_handler,
)
from app.errors.database import (
    CommentNotFoundError,
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    PostNotFoundError,
    RecordNotFoundError,
    UserNotFoundError,
    database_exception_handler,
)
from app.errors.password_hasher import (
    PasswordHashingError,
    PasswordRehashError,
    password_hashing_exception_handler,
)
from app.errors.validation import validation_exception_handler

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "BlogError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheSerializationError",
    "CommentNotFoundError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateActionError",
    "DuplicateEntryError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "PasswordRehashError",
    "PostNotFoundError",
    "RecordNotFoundError",
    "ThreadDepthExceededError",
    "UserAlreadyExistsError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "ValidationFailedError",
    "auth_exception_handler",
    "blog_exception_handler",
    "cache_exception_handler",
    "create_exception_handler",
    "create_internal_error_handler",
    "database_exception_handler",
    "password_hashing_exception_handler",
    "validation_exception_handler",
]
