# Infrastructure Adapters Package
from .memory_store import (
    InMemoryItemRepository,
    InMemoryProgressRepository,
    InMemorySessionRepository,
)

__all__ = ["InMemoryItemRepository", "InMemoryProgressRepository", "InMemorySessionRepository"]
