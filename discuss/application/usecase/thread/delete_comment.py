"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import NotAuthorizedError, NotFoundError
from discuss.domain.service import (
    CommentBackend,
    ThreadService,
    TreeStore,
    ViewProjector,
)
from discuss.domain.value import CommentId, PostId, UserId

from .view import ThreadViewResponse, build_view


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    post_id: int
    comment_id: int
    user_id: int  # Current user ID (must be author)


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft-deleting a comment.

    Deleting an already deleted comment succeeds without calling the backend.
    """

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

    async def execute(self, request: DeleteCommentRequest) -> ThreadViewResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the thread or comment is not loaded
            NotAuthorizedError: If the user doesn't own the comment
        """
        post_id = PostId(request.post_id)
        comment_id = CommentId(request.comment_id)
        user_id = UserId(request.user_id)

        with logfire.span(
            "delete_comment", post_id=post_id, comment_id=comment_id, user_id=user_id
        ):
            thread = await self.thread_service.get_thread(post_id)
            comment = self.tree_store.find(thread.forest, comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.author.id != user_id:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=comment_id,
                    user_id=user_id,
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))

            if not comment.is_deleted:
                await self.comment_backend.delete_comment(comment_id, user_id)
                thread = await self.thread_service.get_thread(post_id)

            forest = self.tree_store.soft_delete(thread.forest, comment_id)
            expansion = thread.expansion.stop_editing(comment_id).close_reply_form(
                comment_id
            )
            thread = await self.thread_service.save(
                thread.with_forest(forest).with_expansion(expansion)
            )

        return build_view(thread, self.view_projector, user_id)
