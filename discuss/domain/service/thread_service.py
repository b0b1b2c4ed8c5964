"""Thread domain service."""

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model import Thread
from discuss.domain.repository import ThreadRepository
from discuss.domain.value import PostId

from .base import Service


class ThreadService(Service):
    """Domain service for thread session lookups."""

    def __init__(self, thread_repository: ThreadRepository) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Thread repository
        """
        self.thread_repository = thread_repository

    async def get_thread(self, post_id: PostId) -> Thread:
        """Get the loaded thread of a post.

        Args:
            post_id: Post ID

        Returns:
            Thread

        Raises:
            NotFoundError: If the thread has not been loaded
        """
        with logfire.span("thread_service.get_thread", post_id=post_id):
            thread = await self.thread_repository.find_by_post(post_id)
            if not thread:
                logfire.warn("Thread not loaded", post_id=post_id)
                raise NotFoundError("Thread", str(post_id))
            return thread

    async def find_thread(self, post_id: PostId) -> Thread | None:
        """Get the thread of a post if it has been loaded.

        Args:
            post_id: Post ID

        Returns:
            Thread if loaded, None otherwise
        """
        return await self.thread_repository.find_by_post(post_id)

    async def save(self, thread: Thread) -> Thread:
        """Save thread.

        Args:
            thread: Thread to save

        Returns:
            Saved thread
        """
        with logfire.span("thread_service.save", post_id=thread.post_id):
            saved = await self.thread_repository.save(thread)
            logfire.info(
                "Thread saved",
                post_id=saved.post_id,
                node_count=saved.forest.node_count,
            )
            return saved
