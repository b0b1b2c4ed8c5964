"""Load thread use case."""

import logfire
from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import InvalidStateError
from discuss.domain.model import ExpansionState, Forest, Thread
from discuss.domain.service import CommentBackend, ThreadService, ViewProjector
from discuss.domain.value import PostId, UserId

from .view import ThreadViewResponse, build_view


class LoadThreadRequest(BaseModel):
    """Load thread request."""

    post_id: int
    viewer_id: int | None = None
    full: bool = False  # Fetch every comment with nested replies at once
    keep_expansion: bool = False  # Keep open reply subtrees across a refresh
    page_size: int | None = Field(default=None, ge=1, le=100)


class LoadThreadUseCase(BaseUseCase):
    """Use case for (re)loading the comment forest of a post from the backend."""

    def __init__(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        view_projector: ViewProjector,
        root_page_size: int = 20,
    ) -> None:
        """Initialize load thread use case.

        Args:
            thread_service: Thread domain service
            comment_backend: Comment backend client
            view_projector: View projector
            root_page_size: Default number of root comments to fetch
        """
        self.thread_service = thread_service
        self.comment_backend = comment_backend
        self.view_projector = view_projector
        self.root_page_size = root_page_size

    async def execute(self, request: LoadThreadRequest) -> ThreadViewResponse:
        """Execute load thread flow.

        Steps:
        1. Fetch root comments (first page, or the whole tree when ``full``)
        2. Build a new forest from them
        3. Reset expansion state, or prune it to surviving comments
        4. Save the thread and return its view

        Args:
            request: Load thread request

        Returns:
            Projected thread view

        Raises:
            InvalidStateError: If the backend returned an inconsistent forest
        """
        post_id = PostId(request.post_id)
        with logfire.span("load_thread", post_id=post_id, full=request.full):
            if request.full:
                roots = await self.comment_backend.list_comments(post_id)
            else:
                roots = await self.comment_backend.list_root_comments(
                    post_id, page=0, size=request.page_size or self.root_page_size
                )

            try:
                forest = Forest.build(post_id, roots)
            except InvalidStateError:
                logfire.error("Backend returned malformed forest", post_id=post_id)
                raise

            expansion = ExpansionState()
            if request.keep_expansion:
                previous = await self.thread_service.find_thread(post_id)
                if previous:
                    expansion = previous.expansion.prune(forest)

            thread = await self.thread_service.save(
                Thread(post_id=post_id, forest=forest, expansion=expansion)
            )
            logfire.info(
                "Thread loaded",
                post_id=post_id,
                root_count=len(forest.roots),
                node_count=forest.node_count,
            )

        viewer_id = UserId(request.viewer_id) if request.viewer_id is not None else None
        return build_view(thread, self.view_projector, viewer_id)
