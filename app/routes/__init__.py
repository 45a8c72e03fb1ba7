from app.routes.auth import router as auth_router
from app.routes.cache import router as cache_router
from app.routes.comments import router as comments_router
from app.routes.posts import router as posts_router
from app.routes.taxonomy import categories_router, tags_router
from app.routes.users import router as users_router

__all__ = [
    "auth_router",
    "cache_router",
    "categories_router",
    "comments_router",
    "posts_router",
    "tags_router",
    "users_router",
]
