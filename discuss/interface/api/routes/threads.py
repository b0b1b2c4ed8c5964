"""Thread routes.

The viewer's identity comes from the ``X-User-Id`` header set by the
authenticating gateway in front of this service.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field

from discuss.adapter.error import BackendError
from discuss.application.usecase.thread import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetThreadViewRequest,
    GetThreadViewUseCase,
    LoadThreadRequest,
    LoadThreadUseCase,
    SetFormStateRequest,
    SetFormStateUseCase,
    ThreadViewResponse,
    ToggleRepliesRequest,
    ToggleRepliesUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from discuss.domain.error import DomainError, NotFoundError
from discuss.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["threads"], route_class=DishkaRoute)


def _require_viewer(user_id: int | None, action: str) -> int:
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


@router.get("/{post_id}/thread", response_model=ThreadViewResponse)
async def get_thread(
    post_id: int,
    get_view_use_case: FromDishka[GetThreadViewUseCase],
    load_use_case: FromDishka[LoadThreadUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Get the projected comment thread of a post.

    The thread is loaded from the comment backend on first access.
    """
    try:
        return await get_view_use_case.execute(
            GetThreadViewRequest(post_id=post_id, viewer_id=x_user_id)
        )
    except NotFoundError:
        pass

    try:
        return await load_use_case.execute(
            LoadThreadRequest(post_id=post_id, viewer_id=x_user_id)
        )
    except (DomainError, BackendError) as e:
        logfire.warn("Thread load failed", post_id=post_id, error=str(e))
        raise to_http_exception(e)


class RefreshThreadAPIRequest(BaseModel):
    """API request for refreshing a thread."""

    full: bool = False
    keep_expansion: bool = True


@router.post("/{post_id}/thread/refresh", response_model=ThreadViewResponse)
async def refresh_thread(
    post_id: int,
    request: RefreshThreadAPIRequest,
    load_use_case: FromDishka[LoadThreadUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Reload the thread of a post from the comment backend."""
    try:
        return await load_use_case.execute(
            LoadThreadRequest(
                post_id=post_id,
                viewer_id=x_user_id,
                full=request.full,
                keep_expansion=request.keep_expansion,
            )
        )
    except (DomainError, BackendError) as e:
        logfire.warn("Thread refresh failed", post_id=post_id, error=str(e))
        raise to_http_exception(e)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # Parent comment ID for replies


@router.post(
    "/{post_id}/comments",
    response_model=ThreadViewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Comment on a post or reply to a comment. Requires a viewer."""
    author_id = _require_viewer(x_user_id, "create comments")
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                author_id=author_id,
                content=request.content,
                parent_id=request.parent_id,
            )
        )
    except (DomainError, BackendError) as e:
        logfire.warn("Comment creation failed", post_id=post_id, error=str(e))
        raise to_http_exception(e)


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str = Field(min_length=1, max_length=10000)


@router.patch("/{post_id}/comments/{comment_id}", response_model=ThreadViewResponse)
async def update_comment(
    post_id: int,
    comment_id: int,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Edit a comment's text. Only the author can edit."""
    user_id = _require_viewer(x_user_id, "edit comments")
    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                post_id=post_id,
                comment_id=comment_id,
                user_id=user_id,
                content=request.content,
            )
        )
    except (DomainError, BackendError) as e:
        logfire.warn("Comment update failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.delete("/{post_id}/comments/{comment_id}", response_model=ThreadViewResponse)
async def delete_comment(
    post_id: int,
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Delete a comment, leaving a tombstone. Only the author can delete."""
    user_id = _require_viewer(x_user_id, "delete comments")
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(post_id=post_id, comment_id=comment_id, user_id=user_id)
        )
    except (DomainError, BackendError) as e:
        logfire.warn("Comment delete failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


async def _toggle(
    use_case: ToggleRepliesUseCase,
    post_id: int,
    comment_id: int,
    expand: bool,
    refresh: bool,
    viewer_id: int | None,
) -> ThreadViewResponse:
    try:
        return await use_case.execute(
            ToggleRepliesRequest(
                post_id=post_id,
                comment_id=comment_id,
                expand=expand,
                refresh=refresh,
                viewer_id=viewer_id,
            )
        )
    except (DomainError, BackendError) as e:
        logfire.warn("Toggle replies failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.post(
    "/{post_id}/comments/{comment_id}/replies/expand",
    response_model=ThreadViewResponse,
)
async def expand_replies(
    post_id: int,
    comment_id: int,
    toggle_use_case: FromDishka[ToggleRepliesUseCase],
    refresh: bool = False,
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Show a comment's replies, loading them first if needed."""
    return await _toggle(toggle_use_case, post_id, comment_id, True, refresh, x_user_id)


@router.post(
    "/{post_id}/comments/{comment_id}/replies/collapse",
    response_model=ThreadViewResponse,
)
async def collapse_replies(
    post_id: int,
    comment_id: int,
    toggle_use_case: FromDishka[ToggleRepliesUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Hide a comment's replies."""
    return await _toggle(toggle_use_case, post_id, comment_id, False, False, x_user_id)


class FormStateAPIRequest(BaseModel):
    """API request for opening or closing a comment form."""

    open: bool


@router.put(
    "/{post_id}/comments/{comment_id}/forms/{form}",
    response_model=ThreadViewResponse,
)
async def set_form_state(
    post_id: int,
    comment_id: int,
    form: str,
    request: FormStateAPIRequest,
    set_form_state_use_case: FromDishka[SetFormStateUseCase],
    x_user_id: int | None = Header(default=None),
) -> ThreadViewResponse:
    """Open or close the reply form (``reply``) or edit form (``edit``)."""
    if form not in ("reply", "edit"):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown form: {form}"
        )
    try:
        return await set_form_state_use_case.execute(
            SetFormStateRequest(
                post_id=post_id,
                comment_id=comment_id,
                form=form,
                open=request.open,
                viewer_id=x_user_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
