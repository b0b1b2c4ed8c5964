"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import ThreadSettings
from discuss.domain.repository import ThreadRepository
from discuss.domain.service import ThreadService, TreeStore, ViewProjector
from discuss.persistence.repository.inmemory import InMemoryThreadRepository
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Thread sessions live in process memory, so the repository is APP-scoped
    and shared by every request. Tree store and projector are stateless.
    """

    scope = Scope.APP

    @provide
    def get_thread_repository(self) -> ThreadRepository:
        """Provide in-memory thread repository."""
        return InMemoryThreadRepository()

    @provide
    def get_thread_service(self, thread_repository: ThreadRepository) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(thread_repository=thread_repository)

    @provide
    def get_tree_store(self) -> TreeStore:
        """Provide tree store domain service."""
        return TreeStore()

    @provide
    def get_view_projector(self, thread_settings: ThreadSettings) -> ViewProjector:
        """Provide view projector domain service."""
        return ViewProjector(max_display_depth=thread_settings.max_display_depth)
