"""Repository implementations."""

from discuss.persistence.repository.inmemory import InMemoryThreadRepository

__all__ = ["InMemoryThreadRepository"]
