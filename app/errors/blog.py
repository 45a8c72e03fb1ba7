"""Domain errors raised by post, comment and follow operations."""

from logging import getLogger

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_403_FORBIDDEN

from app.configs import file_logger, settings
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class BlogError(BaseAppError):
    """Base class for blog domain errors."""


class ValidationFailedError(BlogError):
    """A request was well-formed but violates a business rule."""

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class DuplicateActionError(ValidationFailedError):
    """A like, save or follow that already exists (or an undo of one that doesn't)."""


class ThreadDepthExceededError(ValidationFailedError):
    """Raised when replying to a comment already at the maximum nesting depth."""

    def __init__(self, max_depth: int = settings.MAX_THREAD_DEPTH) -> None:
        super().__init__(f"Maximum thread depth of {max_depth} levels reached")


class ForbiddenError(BlogError):
    """The authenticated user does not own the resource."""

    def __init__(self, detail: str = "Not authorized") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


blog_exception_handler = create_exception_handler(logger)
