"""Transient per-comment UI state.

Which reply subtrees are open, which comment has its reply form open and
which one is being edited is view state, not thread data, so it lives
next to the Forest rather than inside it.
"""

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.model.forest import Forest
from discuss.domain.value import CommentId


class ExpansionState(DomainModel):
    """UI flags keyed by comment id. Every change returns a new value."""

    replies_visible: frozenset[CommentId] = Field(default_factory=frozenset)
    reply_form_open: frozenset[CommentId] = Field(default_factory=frozenset)
    editing: frozenset[CommentId] = Field(default_factory=frozenset)

    def is_expanded(self, comment_id: CommentId) -> bool:
        return comment_id in self.replies_visible

    def is_reply_form_open(self, comment_id: CommentId) -> bool:
        return comment_id in self.reply_form_open

    def is_editing(self, comment_id: CommentId) -> bool:
        return comment_id in self.editing

    def expand(self, comment_id: CommentId) -> "ExpansionState":
        return self.model_copy(
            update={"replies_visible": self.replies_visible | {comment_id}}
        )

    def collapse(self, comment_id: CommentId) -> "ExpansionState":
        return self.model_copy(
            update={"replies_visible": self.replies_visible - {comment_id}}
        )

    def toggle_replies(self, comment_id: CommentId) -> "ExpansionState":
        if self.is_expanded(comment_id):
            return self.collapse(comment_id)
        return self.expand(comment_id)

    def open_reply_form(self, comment_id: CommentId) -> "ExpansionState":
        return self.model_copy(
            update={"reply_form_open": self.reply_form_open | {comment_id}}
        )

    def close_reply_form(self, comment_id: CommentId) -> "ExpansionState":
        return self.model_copy(
            update={"reply_form_open": self.reply_form_open - {comment_id}}
        )

    def start_editing(self, comment_id: CommentId) -> "ExpansionState":
        return self.model_copy(update={"editing": self.editing | {comment_id}})

    def stop_editing(self, comment_id: CommentId) -> "ExpansionState":
        return self.model_copy(update={"editing": self.editing - {comment_id}})

    def prune(self, forest: Forest) -> "ExpansionState":
        """Drop flags for comments that are no longer materialized in ``forest``.

        Used after a refresh replaced the forest wholesale.
        """
        present = {node.id for node, _ in forest.walk()}
        return ExpansionState(
            replies_visible=self.replies_visible & present,
            reply_form_open=self.reply_form_open & present,
            editing=self.editing & present,
        )
