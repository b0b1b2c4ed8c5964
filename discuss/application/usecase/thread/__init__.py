"""Thread use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_thread_view import GetThreadViewRequest, GetThreadViewUseCase
from .load_thread import LoadThreadRequest, LoadThreadUseCase
from .set_form_state import SetFormStateRequest, SetFormStateUseCase
from .toggle_replies import ToggleRepliesRequest, ToggleRepliesUseCase
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase
from .view import ThreadItem, ThreadViewResponse, build_view

__all__ = [
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetThreadViewRequest",
    "GetThreadViewUseCase",
    "LoadThreadRequest",
    "LoadThreadUseCase",
    "SetFormStateRequest",
    "SetFormStateUseCase",
    "ThreadItem",
    "ThreadViewResponse",
    "ToggleRepliesRequest",
    "ToggleRepliesUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
    "build_view",
]
