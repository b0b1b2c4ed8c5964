"""Comment node entity.

Comments form a forest per post. Each node owns its replies through
``children``, which is only partially materialized: replies are fetched
one level at a time on demand, so ``children is None`` ("not loaded yet")
is a different state from ``children == ()`` ("loaded, no replies").
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from discuss.domain.model.common import DomainModel
from discuss.domain.value import AuthorRef, CommentId, CommentState


class CommentNode(DomainModel):
    """Comment entity.

    Represents a top-level comment on a post or a reply to another comment.
    Nesting depth is unbounded; depth is never stored on the node and is
    recomputed from the ancestor chain when the thread is projected.

    Deleted comments stay in the tree as tombstones so their replies remain
    reachable:
    - state: DELETED
    - body: always empty
    - children: untouched
    """

    id: CommentId
    parent_id: Optional[CommentId] = None
    author: AuthorRef
    body: str = ""
    state: CommentState = CommentState.ACTIVE
    created_at: datetime = Field(default_factory=datetime.now)
    edited_at: Optional[datetime] = None
    direct_reply_count: int = Field(default=0, ge=0)
    children: Optional[tuple["CommentNode", ...]] = None

    @model_validator(mode="after")
    def validate_tombstone(self) -> "CommentNode":
        """Deleted comments must not carry content."""
        if self.state == CommentState.DELETED and self.body:
            raise ValueError("Deleted comment must have an empty body")
        return self

    @property
    def is_deleted(self) -> bool:
        return self.state == CommentState.DELETED

    @property
    def is_edited(self) -> bool:
        return self.edited_at is not None

    @property
    def is_materialized(self) -> bool:
        """Whether this node's replies have been loaded (possibly empty)."""
        return self.children is not None

    @property
    def has_unloaded_replies(self) -> bool:
        """Server reports replies that have not been fetched yet.

        Drives the "load replies" affordance in the UI.
        """
        return self.direct_reply_count > 0 and self.children is None

    @property
    def has_more_replies(self) -> bool:
        """Replies are loaded but fewer than the server reports."""
        return (
            self.children is not None
            and len(self.children) < self.direct_reply_count
        )


CommentNode.model_rebuild()
