"""Domain model entities for comment threads."""

from discuss.domain.model.comment import CommentNode
from discuss.domain.model.expansion import ExpansionState
from discuss.domain.model.forest import Forest
from discuss.domain.model.thread import Thread

__all__ = [
    "CommentNode",
    "Forest",
    "ExpansionState",
    "Thread",
]
