"""Domain services."""

from .backend import CommentBackend
from .base import Service
from .thread_service import ThreadService
from .tree_store import TreeStore
from .view_projector import MAX_DISPLAY_DEPTH, DisplayRecord, ViewProjector

__all__ = [
    "CommentBackend",
    "DisplayRecord",
    "MAX_DISPLAY_DEPTH",
    "Service",
    "ThreadService",
    "TreeStore",
    "ViewProjector",
]
