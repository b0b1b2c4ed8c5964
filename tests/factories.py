"""Builders for test data."""

from datetime import datetime
from typing import Optional

from discuss.domain.model import CommentNode
from discuss.domain.value import AuthorRef, CommentId, CommentState, UserId

CREATED_AT = datetime(2025, 1, 1, 12, 0, 0)


def make_author(user_id: int = 1, username: str | None = None) -> AuthorRef:
    """Build an author reference."""
    return AuthorRef(id=UserId(user_id), username=username or f"user{user_id}")


def make_comment(
    comment_id: int,
    parent_id: Optional[int] = None,
    body: str | None = None,
    author_id: int = 1,
    reply_count: int = 0,
    children: Optional[tuple[CommentNode, ...]] = None,
    state: CommentState = CommentState.ACTIVE,
) -> CommentNode:
    """Build a comment node.

    The body defaults to "comment <id>" for active comments and is empty for
    deleted ones.
    """
    if body is None:
        body = "" if state == CommentState.DELETED else f"comment {comment_id}"
    return CommentNode(
        id=CommentId(comment_id),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        author=make_author(author_id),
        body=body,
        state=state,
        created_at=CREATED_AT,
        direct_reply_count=reply_count,
        children=children,
    )


def make_chain(length: int, start_id: int = 1) -> CommentNode:
    """Build a single reply chain ``length`` comments deep, all loaded.

    The deepest comment has unmaterialized children.
    """
    deepest_id = start_id + length - 1
    node = make_comment(deepest_id, parent_id=deepest_id - 1 if length > 1 else None)
    for comment_id in range(deepest_id - 1, start_id - 1, -1):
        node = make_comment(
            comment_id,
            parent_id=comment_id - 1 if comment_id > start_id else None,
            reply_count=1,
            children=(node,),
        )
    return node
