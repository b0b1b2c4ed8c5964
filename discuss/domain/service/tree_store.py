"""Tree store domain service.

Pure operations that derive a new Forest from an existing one plus an
event (a reply, an edit, a deletion, a batch of lazily loaded replies).
Failures raise domain errors before anything is built, so the input
Forest is never affected.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Optional

import logfire

from discuss.domain.error import InvalidStateError, NotFoundError
from discuss.domain.model import CommentNode, Forest
from discuss.domain.value import CommentId, CommentState

from .base import Service

Path = tuple[int, ...]
NodeTransform = Callable[[CommentNode], CommentNode]


def _locate(roots: Sequence[CommentNode], node_id: CommentId) -> Optional[Path]:
    """Depth-first pre-order search returning the index path to ``node_id``.

    Unmaterialized subtrees are leaves. Stops at the first match.
    """
    stack: list[tuple[Path, CommentNode]] = [
        ((index,), root) for index, root in reversed(list(enumerate(roots)))
    ]
    while stack:
        path, node = stack.pop()
        if node.id == node_id:
            return path
        if node.children:
            stack.extend(
                (path + (index,), child)
                for index, child in reversed(list(enumerate(node.children)))
            )
    return None


def _node_at(roots: Sequence[CommentNode], path: Path) -> CommentNode:
    node = roots[path[0]]
    for index in path[1:]:
        node = (node.children or ())[index]
    return node


def _replace_at(
    roots: Sequence[CommentNode], path: Path, replacement: CommentNode
) -> tuple[CommentNode, ...]:
    """Rebuild the ancestor chain of ``path`` around ``replacement``.

    Siblings and untouched subtrees are shared with the previous snapshot.
    """
    chain = [roots[path[0]]]
    for index in path[1:-1]:
        chain.append((chain[-1].children or ())[index])

    for parent, index in zip(reversed(chain[: len(path) - 1]), reversed(path[1:])):
        children = list(parent.children or ())
        children[index] = replacement
        replacement = parent.model_copy(update={"children": tuple(children)})

    new_roots = list(roots)
    new_roots[path[0]] = replacement
    return tuple(new_roots)


def _subtree_ids(node: CommentNode) -> set[CommentId]:
    ids: set[CommentId] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        ids.add(current.id)
        if current.children:
            stack.extend(current.children)
    return ids


class TreeStore(Service):
    """Domain service for comment forest mutations.

    All operations share one locate-and-replace primitive, ``_update``,
    parameterized by a per-operation transform.
    """

    def find(self, forest: Forest, node_id: CommentId) -> Optional[CommentNode]:
        """Find a comment anywhere in the materialized part of the forest.

        Args:
            forest: Forest to search
            node_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        path = _locate(forest.roots, node_id)
        return _node_at(forest.roots, path) if path is not None else None

    def create_root(self, forest: Forest, new_node: CommentNode) -> Forest:
        """Append a top-level comment to the forest.

        Args:
            forest: Current forest
            new_node: Persisted comment returned by the backend

        Returns:
            New forest with the comment appended to the roots. The same forest
            if a comment with this ID is already present.

        Raises:
            InvalidStateError: If the comment names a parent, or its
                nested replies clash with the forest
        """
        with logfire.span(
            "tree_store.create_root",
            post_id=forest.post_id,
            comment_id=new_node.id,
        ):
            if new_node.parent_id is not None:
                logfire.error(
                    "Top-level comment carries a parent",
                    comment_id=new_node.id,
                    parent_id=new_node.parent_id,
                )
                raise InvalidStateError(
                    "Comment", str(new_node.id), "top-level comment has a parent"
                )
            if forest.contains(new_node.id):
                logfire.warn("Duplicate comment ignored", comment_id=new_node.id)
                return forest
            _check_incoming(forest, new_node)

            updated = forest.model_copy(update={"roots": (*forest.roots, new_node)})
            logfire.info(
                "Root comment created",
                post_id=forest.post_id,
                comment_id=new_node.id,
                root_count=len(updated.roots),
            )
            return updated

    def create_reply(
        self, forest: Forest, parent_id: CommentId, new_node: CommentNode
    ) -> Forest:
        """Attach a reply under an existing comment.

        The parent's children are materialized as a single-element sequence
        if they had not been loaded yet, and its reply count goes up by one.

        Args:
            forest: Current forest
            parent_id: Parent comment ID
            new_node: Persisted reply returned by the backend

        Returns:
            New forest containing the reply. The same forest if a comment
            with this ID is already present.

        Raises:
            NotFoundError: If the parent is not materialized in the forest
            InvalidStateError: If the reply names a different parent, or its
                nested replies clash with the forest
        """
        with logfire.span(
            "tree_store.create_reply",
            post_id=forest.post_id,
            parent_id=parent_id,
            comment_id=new_node.id,
        ):
            if new_node.parent_id is None:
                new_node = new_node.model_copy(update={"parent_id": parent_id})
            elif new_node.parent_id != parent_id:
                logfire.error(
                    "Reply parent mismatch",
                    comment_id=new_node.id,
                    parent_id=parent_id,
                    reply_parent_id=new_node.parent_id,
                )
                raise InvalidStateError(
                    "Comment",
                    str(new_node.id),
                    f"reply belongs to {new_node.parent_id}, not {parent_id}",
                )
            if forest.contains(new_node.id):
                logfire.warn("Duplicate comment ignored", comment_id=new_node.id)
                return forest
            _check_incoming(forest, new_node)

            def attach(parent: CommentNode) -> CommentNode:
                return parent.model_copy(
                    update={
                        "children": (*(parent.children or ()), new_node),
                        "direct_reply_count": parent.direct_reply_count + 1,
                    }
                )

            updated = self._update(forest, parent_id, attach)
            logfire.info(
                "Reply created", parent_id=parent_id, comment_id=new_node.id
            )
            return updated

    def edit_content(
        self,
        forest: Forest,
        node_id: CommentId,
        new_body: str,
        edited_at: Optional[datetime] = None,
    ) -> Forest:
        """Replace the body of an active comment.

        Args:
            forest: Current forest
            node_id: Comment ID
            new_body: New text content
            edited_at: Edit timestamp (defaults to now)

        Returns:
            New forest with the comment's body and edit time updated

        Raises:
            NotFoundError: If the comment is not in the forest
            InvalidStateError: If the comment is deleted
        """
        with logfire.span(
            "tree_store.edit_content",
            comment_id=node_id,
            text_length=len(new_body),
        ):
            timestamp = edited_at or datetime.now()

            def edit(node: CommentNode) -> CommentNode:
                if node.is_deleted:
                    logfire.warn("Attempt to edit deleted comment", comment_id=node_id)
                    raise InvalidStateError(
                        "Comment", str(node_id), "deleted comments cannot be edited"
                    )
                return node.model_copy(
                    update={"body": new_body, "edited_at": timestamp}
                )

            updated = self._update(forest, node_id, edit)
            logfire.info("Comment edited", comment_id=node_id)
            return updated

    def soft_delete(self, forest: Forest, node_id: CommentId) -> Forest:
        """Turn a comment into a tombstone.

        The body is cleared and the replies are kept. Deleting a comment that
        is already deleted succeeds without changes so retries are safe.

        Args:
            forest: Current forest
            node_id: Comment ID

        Returns:
            New forest with the comment deleted, or the same forest if it
            already was

        Raises:
            NotFoundError: If the comment is not in the forest
        """
        with logfire.span("tree_store.soft_delete", comment_id=node_id):

            def delete(node: CommentNode) -> CommentNode:
                if node.is_deleted:
                    return node
                return node.model_copy(
                    update={"state": CommentState.DELETED, "body": ""}
                )

            updated = self._update(forest, node_id, delete)
            if updated is forest:
                logfire.info("Comment already deleted", comment_id=node_id)
            else:
                logfire.info("Comment deleted", comment_id=node_id)
            return updated

    def materialize_replies(
        self,
        forest: Forest,
        node_id: CommentId,
        loaded_children: Sequence[CommentNode],
    ) -> Forest:
        """Replace a comment's replies with one freshly loaded level.

        Each loaded reply is stored with unmaterialized children of its own.
        Applying the same payload twice yields an equal forest.

        Args:
            forest: Current forest
            node_id: Parent comment ID
            loaded_children: Direct replies as returned by the backend

        Returns:
            New forest with the replies in place

        Raises:
            NotFoundError: If the parent is not in the forest
            InvalidStateError: If a reply belongs to another parent or an ID
                would appear twice in the forest
        """
        with logfire.span(
            "tree_store.materialize_replies",
            comment_id=node_id,
            reply_count=len(loaded_children),
        ):
            replies: list[CommentNode] = []
            for child in loaded_children:
                if child.parent_id is not None and child.parent_id != node_id:
                    logfire.error(
                        "Loaded reply belongs to another parent",
                        comment_id=node_id,
                        reply_id=child.id,
                        reply_parent_id=child.parent_id,
                    )
                    raise InvalidStateError(
                        "Comment",
                        str(child.id),
                        f"loaded reply belongs to {child.parent_id}, not {node_id}",
                    )
                replies.append(
                    child.model_copy(update={"parent_id": node_id, "children": None})
                )

            reply_ids = [reply.id for reply in replies]
            if len(set(reply_ids)) != len(reply_ids):
                raise InvalidStateError(
                    "Comment", str(node_id), "loaded replies repeat an ID"
                )

            def replace_children(node: CommentNode) -> CommentNode:
                # The parent keeps its own id; only its current replies may reappear
                outside = _all_ids(forest) - (_subtree_ids(node) - {node.id})
                clash = outside.intersection(reply_ids)
                if clash:
                    raise InvalidStateError(
                        "Comment",
                        str(node_id),
                        f"loaded replies already present elsewhere: {sorted(clash)}",
                    )
                loaded = tuple(replies)
                if node.children == loaded:
                    return node
                return node.model_copy(update={"children": loaded})

            updated = self._update(forest, node_id, replace_children)
            logfire.info(
                "Replies materialized",
                comment_id=node_id,
                reply_count=len(replies),
                changed=updated is not forest,
            )
            return updated

    def _update(
        self, forest: Forest, node_id: CommentId, transform: NodeTransform
    ) -> Forest:
        """Locate ``node_id`` and swap it for ``transform(node)``.

        Returns the same forest when the transform hands back the node
        unchanged.

        Raises:
            NotFoundError: If the node is not materialized in the forest
        """
        path = _locate(forest.roots, node_id)
        if path is None:
            logfire.warn(
                "Comment not found in forest",
                post_id=forest.post_id,
                comment_id=node_id,
            )
            raise NotFoundError("Comment", str(node_id))

        node = _node_at(forest.roots, path)
        replacement = transform(node)
        if replacement is node:
            return forest
        return forest.model_copy(
            update={"roots": _replace_at(forest.roots, path, replacement)}
        )


def _all_ids(forest: Forest) -> set[CommentId]:
    return {node.id for node, _ in forest.walk()}


def _check_incoming(forest: Forest, new_node: CommentNode) -> None:
    """Reject a new subtree whose ids or parent links clash with ``forest``.

    Raises:
        InvalidStateError: If an id is already present or repeated, or a
            nested reply names a different parent
    """
    existing = _all_ids(forest)
    seen: set[CommentId] = set()
    stack = [new_node]
    while stack:
        node = stack.pop()
        if node.id in existing or node.id in seen:
            logfire.error("Incoming comment id clash", comment_id=node.id)
            raise InvalidStateError(
                "Comment", str(node.id), "comment already present in the thread"
            )
        seen.add(node.id)
        for child in node.children or ():
            if child.parent_id != node.id:
                raise InvalidStateError(
                    "Comment",
                    str(child.id),
                    f"reply belongs to {child.parent_id}, not {node.id}",
                )
            stack.append(child)
