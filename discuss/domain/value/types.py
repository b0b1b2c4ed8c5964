"""Domain value objects for comment threads."""

from enum import Enum

from pydantic import Field

from discuss.domain.value.common import ValueObject
from discuss.domain.value.identifiers import UserId


class CommentState(str, Enum):
    """Lifecycle state of a comment.

    Comments are never hard-removed from a thread. Deletion is a
    content-clearing transition to DELETED.
    """

    ACTIVE = "active"
    DELETED = "deleted"


class AuthorRef(ValueObject):
    """Opaque reference to the external user record that wrote a comment."""

    id: UserId
    username: str = Field(min_length=1, max_length=255)
    nickname: str | None = None
    avatar_url: str | None = None

    @property
    def display_name(self) -> str:
        """Nickname if set, otherwise the username."""
        return self.nickname or self.username
