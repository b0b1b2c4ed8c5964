"""Thread repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from discuss.domain.model import Thread
from discuss.domain.value import PostId


class ThreadRepository(ABC):
    """Repository for Thread sessions.

    Holds the single current thread value per post. Implementations keep
    threads in process memory; nothing here is durable.
    """

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> Optional[Thread]:
        """Find the thread of a post.

        Args:
            post_id: The post ID

        Returns:
            The thread if loaded, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, thread: Thread) -> Thread:
        """Store a thread, replacing any previous value for its post.

        Args:
            thread: The thread to save

        Returns:
            The saved thread
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Forget the thread of a post.

        Args:
            post_id: The post ID
        """
        pass
