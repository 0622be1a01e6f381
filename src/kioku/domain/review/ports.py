"""
Ports (interfaces) for item persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import ReviewableItem, ReviewLogEntry, ScheduleUpdate


class ItemRepository(ABC):
    """
    Port for loading and updating reviewable items.

    Implementations must apply save_schedule as an atomic read-modify-write
    per item; last-writer-wins is acceptable.

    Implementations:
        - InMemoryItemRepository: Dict-backed store for tests and the CLI.
    """

    @abstractmethod
    async def get_item(self, user_id: str, item_id: str) -> ReviewableItem | None:
        """
        Fetch a single item owned by the learner.

        Returns:
            The item, or None if it does not exist.
        """
        pass

    @abstractmethod
    async def list_items(self, user_id: str) -> list[ReviewableItem]:
        """Fetch every item owned by the learner."""
        pass

    @abstractmethod
    async def save_schedule(self, user_id: str, item_id: str, update: ScheduleUpdate) -> None:
        """Persist the result of a review onto the item."""
        pass

    @abstractmethod
    async def append_review_log(self, entry: ReviewLogEntry) -> None:
        """Record a review in the learner's history."""
        pass
