"""Storage backends used by the response cache."""

from app.clients.memory_client import MemoryClient

__all__ = ["MemoryClient"]
