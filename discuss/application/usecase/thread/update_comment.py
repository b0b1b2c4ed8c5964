"""Update comment use case."""

import logfire
from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import InvalidStateError, NotAuthorizedError, NotFoundError
from discuss.domain.service import (
    CommentBackend,
    ThreadService,
    TreeStore,
    ViewProjector,
)
from discuss.domain.value import CommentId, PostId, UserId

from .view import ThreadViewResponse, build_view


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    post_id: int
    comment_id: int
    user_id: int  # Current user ID (must be author)
    content: str = Field(min_length=1, max_length=10000)


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's text."""

    def __init__(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> None:
        self.thread_service = thread_service
        self.comment_backend = comment_backend
        self.tree_store = tree_store
        self.view_projector = view_projector

    async def execute(self, request: UpdateCommentRequest) -> ThreadViewResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            Projected thread view with the edited comment

        Raises:
            NotFoundError: If the thread or comment is not loaded
            NotAuthorizedError: If the user doesn't own the comment
            InvalidStateError: If the comment is deleted
        """
        post_id = PostId(request.post_id)
        comment_id = CommentId(request.comment_id)
        user_id = UserId(request.user_id)

        with logfire.span(
            "update_comment", post_id=post_id, comment_id=comment_id, user_id=user_id
        ):
            thread = await self.thread_service.get_thread(post_id)
            comment = self.tree_store.find(thread.forest, comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.author.id != user_id:
                logfire.warn(
                    "Unauthorized comment update attempt",
                    comment_id=comment_id,
                    user_id=user_id,
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))
            if comment.is_deleted:
                raise InvalidStateError(
                    "Comment", str(comment_id), "deleted comments cannot be edited"
                )

            persisted = await self.comment_backend.update_comment(
                comment_id, request.content, user_id
            )

            thread = await self.thread_service.get_thread(post_id)
            forest = self.tree_store.edit_content(
                thread.forest, comment_id, persisted.body, persisted.edited_at
            )
            thread = await self.thread_service.save(
                thread.with_forest(forest).with_expansion(
                    thread.expansion.stop_editing(comment_id)
                )
            )

        return build_view(thread, self.view_projector, user_id)
