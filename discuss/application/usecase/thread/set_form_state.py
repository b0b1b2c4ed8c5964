"""Set form state use case."""

from typing import Literal

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import InvalidStateError, NotFoundError
from discuss.domain.service import ThreadService, TreeStore, ViewProjector
from discuss.domain.value import CommentId, PostId, UserId

from .view import ThreadViewResponse, build_view


class SetFormStateRequest(BaseModel):
    """Set form state request."""

    post_id: int
    comment_id: int
    form: Literal["reply", "edit"]
    open: bool
    viewer_id: int | None = None


class SetFormStateUseCase(BaseUseCase):
    """Use case for opening or closing the reply / edit form of a comment."""

    def __init__(
        self,
        thread_service: ThreadService,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> None:
        self.thread_service = thread_service
        self.tree_store = tree_store
        self.view_projector = view_projector

    async def execute(self, request: SetFormStateRequest) -> ThreadViewResponse:
        """Execute set form state flow.

        Raises:
            NotFoundError: If the thread or comment is not loaded
            InvalidStateError: If opening a form on a deleted comment
        """
        post_id = PostId(request.post_id)
        comment_id = CommentId(request.comment_id)

        thread = await self.thread_service.get_thread(post_id)
        comment = self.tree_store.find(thread.forest, comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        if request.open and comment.is_deleted:
            raise InvalidStateError(
                "Comment", str(comment_id), "deleted comments have no actions"
            )

        expansion = thread.expansion
        if request.form == "reply":
            expansion = (
                expansion.open_reply_form(comment_id)
                if request.open
                else expansion.close_reply_form(comment_id)
            )
        else:
            expansion = (
                expansion.start_editing(comment_id)
                if request.open
                else expansion.stop_editing(comment_id)
            )

        thread = await self.thread_service.save(thread.with_expansion(expansion))
        viewer_id = UserId(request.viewer_id) if request.viewer_id is not None else None
        return build_view(thread, self.view_projector, viewer_id)
