"""Repository interfaces for the thread domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from discuss.domain.repository.thread import ThreadRepository

__all__ = [
    "ThreadRepository",
]
