"""Create comment use case."""

import logfire
from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import InvalidStateError, NotFoundError
from discuss.domain.service import (
    CommentBackend,
    ThreadService,
    TreeStore,
    ViewProjector,
)
from discuss.domain.value import CommentId, PostId, UserId

from .view import ThreadViewResponse, build_view


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: int
    author_id: int  # Current user ID
    content: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post or replying to another comment."""

    def __init__(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> None:
        """Initialize create comment use case.

        Args:
            thread_service: Thread domain service
            comment_backend: Comment backend client
            tree_store: Tree store
            view_projector: View projector
        """
        self.thread_service = thread_service
        self.comment_backend = comment_backend
        self.tree_store = tree_store
        self.view_projector = view_projector

    async def execute(self, request: CreateCommentRequest) -> ThreadViewResponse:
        """Execute create comment flow.

        Steps:
        1. Verify the parent is loaded and not deleted (for replies)
        2. Persist the comment via the backend
        3. Insert the persisted comment into the current forest
        4. Show the parent's replies and close its reply form

        Args:
            request: Create comment request

        Returns:
            Projected thread view including the new comment

        Raises:
            NotFoundError: If the thread or the parent comment is not loaded
            InvalidStateError: If replying to a deleted comment
        """
        post_id = PostId(request.post_id)
        author_id = UserId(request.author_id)
        parent_id = CommentId(request.parent_id) if request.parent_id is not None else None

        with logfire.span(
            "create_comment", post_id=post_id, author_id=author_id, parent_id=parent_id
        ):
            thread = await self.thread_service.get_thread(post_id)
            if parent_id is not None:
                parent = self.tree_store.find(thread.forest, parent_id)
                if parent is None:
                    raise NotFoundError("Comment", str(parent_id))
                if parent.is_deleted:
                    raise InvalidStateError(
                        "Comment", str(parent_id), "cannot reply to a deleted comment"
                    )

            comment = await self.comment_backend.create_comment(
                post_id=post_id,
                content=request.content,
                author_id=author_id,
                parent_id=parent_id,
            )

            # Apply to whatever snapshot is current once the backend answered
            thread = await self.thread_service.get_thread(post_id)
            if parent_id is None:
                forest = self.tree_store.create_root(thread.forest, comment)
                expansion = thread.expansion
            else:
                forest = self.tree_store.create_reply(thread.forest, parent_id, comment)
                expansion = thread.expansion.expand(parent_id).close_reply_form(
                    parent_id
                )

            thread = await self.thread_service.save(
                thread.with_forest(forest).with_expansion(expansion)
            )
            logfire.info("Comment added to thread", comment_id=comment.id)

        return build_view(thread, self.view_projector, author_id)
