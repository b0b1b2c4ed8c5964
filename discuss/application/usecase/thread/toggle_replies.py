"""Toggle replies use case."""

import logfire
from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import NotFoundError
from discuss.domain.service import (
    CommentBackend,
    ThreadService,
    TreeStore,
    ViewProjector,
)
from discuss.domain.value import CommentId, PostId, UserId

from .view import ThreadViewResponse, build_view


class ToggleRepliesRequest(BaseModel):
    """Toggle replies request."""

    post_id: int
    comment_id: int
    expand: bool | None = None  # None flips the current state
    refresh: bool = False  # Refetch replies even if already loaded
    viewer_id: int | None = None


class ToggleRepliesUseCase(BaseUseCase):
    """Use case for showing or hiding the replies of a comment.

    Showing replies that have not been loaded yet, or only partly (the
    viewer replied before the earlier replies were fetched), fetches one
    level of them from the backend first.
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

    async def execute(self, request: ToggleRepliesRequest) -> ThreadViewResponse:
        """Execute toggle replies flow.

        Args:
            request: Toggle replies request

        Returns:
            Projected thread view

        Raises:
            NotFoundError: If the thread or comment is not loaded
        """
        post_id = PostId(request.post_id)
        comment_id = CommentId(request.comment_id)

        with logfire.span("toggle_replies", post_id=post_id, comment_id=comment_id):
            thread = await self.thread_service.get_thread(post_id)
            comment = self.tree_store.find(thread.forest, comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            expand = (
                request.expand
                if request.expand is not None
                else not thread.expansion.is_expanded(comment_id)
            )

            if expand and (
                comment.has_unloaded_replies
                or comment.has_more_replies
                or (request.refresh and comment.direct_reply_count > 0)
            ):
                replies = await self.comment_backend.list_replies(comment_id)
                # Last loaded payload wins if loads for this comment overlap
                thread = await self.thread_service.get_thread(post_id)
                forest = self.tree_store.materialize_replies(
                    thread.forest, comment_id, replies
                )
                thread = thread.with_forest(forest)
                logfire.info(
                    "Replies loaded", comment_id=comment_id, reply_count=len(replies)
                )

            expansion = (
                thread.expansion.expand(comment_id)
                if expand
                else thread.expansion.collapse(comment_id)
            )
            thread = await self.thread_service.save(thread.with_expansion(expansion))

        viewer_id = UserId(request.viewer_id) if request.viewer_id is not None else None
        return build_view(thread, self.view_projector, viewer_id)
