"""View projector domain service.

Flattens a Forest into the ordered display records a rendering layer
consumes, so the renderer never has to recurse over the tree itself.
"""

import logfire
from pydantic import Field

from discuss.domain.model import CommentNode, ExpansionState, Forest
from discuss.domain.model.common import DomainModel

from .base import Service

# Visual nesting stops here; deeper replies keep this indentation.
MAX_DISPLAY_DEPTH = 5


class DisplayRecord(DomainModel):
    """One rendered row of a thread."""

    node: CommentNode
    depth: int = Field(ge=0)  # Capped display depth used for indentation
    true_depth: int = Field(ge=0)
    has_deeper_ancestry_than_displayed: bool = False
    replies_visible: bool = False
    reply_form_open: bool = False
    editing: bool = False

    @property
    def is_tombstone(self) -> bool:
        return self.node.is_deleted

    @property
    def can_load_replies(self) -> bool:
        """Replies exist on the server that are not loaded yet.

        Covers a partly loaded reply list, e.g. after replying to a comment
        whose earlier replies were never fetched.
        """
        return self.node.has_unloaded_replies or self.node.has_more_replies


class ViewProjector(Service):
    """Domain service projecting a forest into display records."""

    def __init__(self, max_display_depth: int = MAX_DISPLAY_DEPTH) -> None:
        """Initialize view projector.

        Args:
            max_display_depth: Deepest indentation level rendered
        """
        if max_display_depth < 0:
            raise ValueError("max_display_depth must be non-negative")
        self.max_display_depth = max_display_depth

    def project(
        self, forest: Forest, expansion: ExpansionState | None = None
    ) -> list[DisplayRecord]:
        """Produce the visible rows of a thread in depth-first pre-order.

        A node's replies are emitted only when its replies are visible and
        have been loaded. Deleted comments still show their replies.

        Args:
            forest: Thread forest
            expansion: UI expansion state (everything collapsed if omitted)

        Returns:
            Display records in rendering order
        """
        expansion = expansion or ExpansionState()
        with logfire.span(
            "view_projector.project",
            post_id=forest.post_id,
            root_count=len(forest.roots),
        ):
            records: list[DisplayRecord] = []
            stack: list[tuple[CommentNode, int]] = [
                (root, 0) for root in reversed(forest.roots)
            ]
            while stack:
                node, true_depth = stack.pop()
                visible = expansion.is_expanded(node.id)
                records.append(
                    DisplayRecord(
                        node=node,
                        depth=min(true_depth, self.max_display_depth),
                        true_depth=true_depth,
                        has_deeper_ancestry_than_displayed=(
                            true_depth > self.max_display_depth
                        ),
                        replies_visible=visible,
                        reply_form_open=expansion.is_reply_form_open(node.id),
                        editing=expansion.is_editing(node.id),
                    )
                )
                if visible and node.is_materialized:
                    stack.extend(
                        (child, true_depth + 1)
                        for child in reversed(node.children or ())
                    )

            logfire.info(
                "Thread projected", post_id=forest.post_id, record_count=len(records)
            )
            return records
