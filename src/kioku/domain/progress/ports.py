"""
Ports (interfaces) for learner progress and session persistence.
"""

from abc import ABC, abstractmethod

from .models import LearnerProgress, ReviewSession


class ProgressRepository(ABC):
    """
    Port for the per-learner progress aggregate.

    Implementations:
        - InMemoryProgressRepository: Dict-backed store for tests and the CLI.
    """

    @abstractmethod
    async def get_progress(self, user_id: str) -> LearnerProgress | None:
        """
        Fetch the learner's progress.

        Returns:
            The progress, or None if the learner has never reviewed anything.
        """
        pass

    @abstractmethod
    async def save_progress(self, user_id: str, progress: LearnerProgress) -> None:
        pass


class SessionRepository(ABC):
    """
    Port for review sessions.

    Implementations:
        - InMemorySessionRepository: Dict-backed store for tests and the CLI.
    """

    @abstractmethod
    async def add_session(self, session: ReviewSession) -> None:
        pass

    @abstractmethod
    async def get_session(self, user_id: str, session_id: str) -> ReviewSession | None:
        pass

    @abstractmethod
    async def save_session(self, session: ReviewSession) -> None:
        pass
