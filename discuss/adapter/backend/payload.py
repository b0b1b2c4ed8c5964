"""Wire format of the comment backend.

The backend speaks camelCase JSON::

    {
      "id": 17, "postId": 3, "parentId": 12, "content": "...",
      "author": {"id": 5, "username": "kim", "nickname": "K", "avatarUrl": null},
      "replies": [...], "replyCount": 2, "status": "ACTIVE",
      "createdAt": "2025-01-01T12:00:00", "updatedAt": "2025-01-01T12:00:00"
    }

``replies`` is optional. Its absence means the replies were not sent, not
that there are none.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from discuss.domain.model import CommentNode
from discuss.domain.value import (
    AuthorRef,
    CommentId,
    CommentState,
    PostId,
    UserId,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorPayload(_CamelModel):
    """Comment author as sent by the backend."""

    id: int
    username: str
    nickname: Optional[str] = None
    avatar_url: Optional[str] = None

    def to_domain(self) -> AuthorRef:
        return AuthorRef(
            id=UserId(self.id),
            username=self.username,
            nickname=self.nickname,
            avatar_url=self.avatar_url,
        )


class CommentPayload(_CamelModel):
    """Comment as sent by the backend."""

    id: int
    post_id: int
    parent_id: Optional[int] = None
    content: str = ""
    author: AuthorPayload
    replies: Optional[list["CommentPayload"]] = None
    reply_count: int = 0
    # BLOCKED comments are moderated away and render like deleted ones
    status: Literal["ACTIVE", "DELETED", "BLOCKED"] = "ACTIVE"
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_domain(self) -> CommentNode:
        """Convert to a domain comment node.

        Nested replies are converted when present; otherwise the node's
        children stay unmaterialized.
        """
        deleted = self.status != "ACTIVE"
        children = (
            tuple(reply.to_domain() for reply in self.replies)
            if self.replies is not None
            else None
        )
        edited_at = (
            self.updated_at
            if self.updated_at is not None and self.updated_at != self.created_at
            else None
        )
        return CommentNode(
            id=CommentId(self.id),
            parent_id=CommentId(self.parent_id) if self.parent_id is not None else None,
            author=self.author.to_domain(),
            body="" if deleted else self.content,
            state=CommentState.DELETED if deleted else CommentState.ACTIVE,
            created_at=self.created_at,
            edited_at=edited_at,
            direct_reply_count=max(self.reply_count, len(children or ())),
            children=children,
        )


CommentPayload.model_rebuild()


class CreateCommentPayload(_CamelModel):
    """Body of ``POST /comments``."""

    post_id: PostId
    parent_id: Optional[CommentId] = None
    content: str


class UpdateCommentPayload(_CamelModel):
    """Body of ``PUT /comments/{id}``."""

    content: str
