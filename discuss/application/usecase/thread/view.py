"""Thread view response shared by the thread use cases."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.model import Thread
from discuss.domain.service import DisplayRecord, ViewProjector
from discuss.domain.value import CommentState, UserId


class ThreadItem(BaseModel):
    """One rendered row of a thread."""

    comment_id: int
    parent_id: int | None
    author_id: int
    author_name: str
    author_avatar_url: str | None
    body: str
    state: CommentState
    created_at: datetime
    edited_at: datetime | None
    edited: bool
    reply_count: int
    loaded_reply_count: int | None  # None while replies are not loaded
    depth: int
    true_depth: int
    has_deeper_ancestry_than_displayed: bool
    replies_visible: bool
    reply_form_open: bool
    editing: bool
    can_load_replies: bool
    can_modify: bool

    @classmethod
    def from_record(
        cls, record: DisplayRecord, viewer_id: UserId | None
    ) -> "ThreadItem":
        """Convert a display record to a response item.

        Args:
            record: Projected display record
            viewer_id: Current user, if any

        Returns:
            Response item; ``can_modify`` is set for the author of an active
            comment
        """
        node = record.node
        return cls(
            comment_id=node.id,
            parent_id=node.parent_id,
            author_id=node.author.id,
            author_name=node.author.display_name,
            author_avatar_url=node.author.avatar_url,
            body=node.body,
            state=node.state,
            created_at=node.created_at,
            edited_at=node.edited_at,
            edited=node.is_edited,
            reply_count=node.direct_reply_count,
            loaded_reply_count=(
                len(node.children) if node.children is not None else None
            ),
            depth=record.depth,
            true_depth=record.true_depth,
            has_deeper_ancestry_than_displayed=record.has_deeper_ancestry_than_displayed,
            replies_visible=record.replies_visible,
            reply_form_open=record.reply_form_open,
            editing=record.editing,
            can_load_replies=record.can_load_replies,
            can_modify=(
                viewer_id is not None
                and node.author.id == viewer_id
                and not node.is_deleted
            ),
        )


class ThreadViewResponse(BaseModel):
    """Projected thread of a post."""

    post_id: int
    root_count: int
    items: list[ThreadItem]
    total: int


def build_view(
    thread: Thread, projector: ViewProjector, viewer_id: UserId | None = None
) -> ThreadViewResponse:
    """Project a thread into its response representation.

    Args:
        thread: Thread session
        projector: View projector
        viewer_id: Current user, if any

    Returns:
        Thread view response
    """
    records = projector.project(thread.forest, thread.expansion)
    items = [ThreadItem.from_record(record, viewer_id) for record in records]
    return ThreadViewResponse(
        post_id=thread.post_id,
        root_count=len(thread.forest.roots),
        items=items,
        total=len(items),
    )
