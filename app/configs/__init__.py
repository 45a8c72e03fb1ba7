from app.configs.settings import (
    CONFIG_MAP,
    CacheConfig,
    LimiterConfig,
    file_logger,
    settings,
)

__all__ = [
    "CacheConfig",
    "LimiterConfig",
    "file_logger",
    "settings",
    "CONFIG_MAP",
]
