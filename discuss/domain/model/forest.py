"""Forest of comment trees for a single post."""

from collections.abc import Iterable, Iterator
from typing import Optional

from pydantic import ValidationError, model_validator

from discuss.domain.error import InvalidStateError

from discuss.domain.model.comment import CommentNode
from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, PostId


class Forest(DomainModel):
    """Ordered root comments of a post together with their loaded replies.

    Every materialized node is owned by exactly one parent (or by the forest
    itself for roots) and its ``parent_id`` names that owner. The order of
    ``roots`` and of every ``children`` sequence is the server's order.

    Forest values are immutable: every mutation produces a new Forest,
    which keeps change detection down to an equality check.
    """

    post_id: PostId
    roots: tuple[CommentNode, ...] = ()

    @model_validator(mode="after")
    def validate_structure(self) -> "Forest":
        """Check parent links and single ownership of every node."""
        seen: set[CommentId] = set()
        stack: list[tuple[CommentNode, Optional[CommentId]]] = [
            (root, None) for root in reversed(self.roots)
        ]
        while stack:
            node, owner_id = stack.pop()
            if node.id in seen:
                raise ValueError(f"Comment {node.id} appears more than once")
            seen.add(node.id)
            if node.parent_id != owner_id:
                raise ValueError(
                    f"Comment {node.id} has parent_id {node.parent_id}, "
                    f"expected {owner_id}"
                )
            if node.children:
                stack.extend((child, node.id) for child in reversed(node.children))
        return self

    @classmethod
    def build(cls, post_id: PostId, roots: Iterable[CommentNode]) -> "Forest":
        """Build a forest from backend roots, checking the structure.

        Args:
            post_id: Post ID
            roots: Root comments in server order

        Returns:
            Validated forest

        Raises:
            InvalidStateError: If parent links are broken or an id repeats
        """
        try:
            return cls(post_id=post_id, roots=tuple(roots))
        except ValidationError as e:
            raise InvalidStateError("Thread", str(post_id), str(e))

    def walk(self) -> Iterator[tuple[CommentNode, int]]:
        """Yield ``(node, depth)`` for every materialized node in pre-order.

        Roots have depth 0. Iterative so arbitrarily deep threads do not hit
        the interpreter's recursion limit.
        """
        stack: list[tuple[CommentNode, int]] = [
            (root, 0) for root in reversed(self.roots)
        ]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            if node.children:
                stack.extend((child, depth + 1) for child in reversed(node.children))

    def find(self, comment_id: CommentId) -> Optional[CommentNode]:
        """Find a materialized node by id (depth-first, first match)."""
        for node, _ in self.walk():
            if node.id == comment_id:
                return node
        return None

    def contains(self, comment_id: CommentId) -> bool:
        return self.find(comment_id) is not None

    @property
    def node_count(self) -> int:
        """Number of materialized nodes, tombstones included."""
        return sum(1 for _ in self.walk())
