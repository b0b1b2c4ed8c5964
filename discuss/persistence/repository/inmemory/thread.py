"""In-memory thread repository."""

from typing import Optional

from discuss.domain.model import Thread
from discuss.domain.repository.thread import ThreadRepository
from discuss.domain.value import PostId


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository."""

    def __init__(self) -> None:
        self._threads: dict[PostId, Thread] = {}

    async def find_by_post(self, post_id: PostId) -> Optional[Thread]:
        """Find the thread of a post."""
        return self._threads.get(post_id)

    async def save(self, thread: Thread) -> Thread:
        """Store a thread."""
        self._threads[thread.post_id] = thread
        return thread

    async def delete(self, post_id: PostId) -> None:
        """Forget the thread of a post."""
        self._threads.pop(post_id, None)
