"""Comment backend adapter."""

from .client import HttpCommentBackend, MockCommentBackend
from .payload import AuthorPayload, CommentPayload

__all__ = [
    "AuthorPayload",
    "CommentPayload",
    "HttpCommentBackend",
    "MockCommentBackend",
]
