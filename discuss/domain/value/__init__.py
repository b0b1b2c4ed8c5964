"""Domain value objects for comment threads."""

from discuss.domain.value.identifiers import CommentId, PostId, UserId
from discuss.domain.value.types import AuthorRef, CommentState

__all__ = [
    # Identifiers
    "CommentId",
    "PostId",
    "UserId",
    # Types
    "AuthorRef",
    "CommentState",
]
