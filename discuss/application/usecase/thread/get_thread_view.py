"""Get thread view use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import ThreadService, ViewProjector
from discuss.domain.value import PostId, UserId

from .view import ThreadViewResponse, build_view


class GetThreadViewRequest(BaseModel):
    """Get thread view request."""

    post_id: int
    viewer_id: int | None = None


class GetThreadViewUseCase(BaseUseCase):
    """Use case for projecting an already loaded thread."""

    def __init__(
        self, thread_service: ThreadService, view_projector: ViewProjector
    ) -> None:
        self.thread_service = thread_service
        self.view_projector = view_projector

    async def execute(self, request: GetThreadViewRequest) -> ThreadViewResponse:
        """Execute get thread view flow.

        Raises:
            NotFoundError: If the thread has not been loaded
        """
        thread = await self.thread_service.get_thread(PostId(request.post_id))
        viewer_id = UserId(request.viewer_id) if request.viewer_id is not None else None
        return build_view(thread, self.view_projector, viewer_id)
