"""Comment backend interface.

The backend owns persistence. The thread service only consumes its
canonical results and feeds them into the tree store.
"""

from discuss.domain.model import CommentNode
from discuss.domain.value import CommentId, PostId, UserId


class CommentBackend:
    """Generic comment backend interface for all transports."""

    async def list_comments(self, post_id: PostId) -> list[CommentNode]:
        """Fetch every comment of a post as root nodes with nested replies.

        Args:
            post_id: Post ID

        Returns:
            Root comments in server order
        """
        raise NotImplementedError

    async def list_root_comments(
        self, post_id: PostId, page: int = 0, size: int = 20
    ) -> list[CommentNode]:
        """Fetch one page of top-level comments of a post.

        Args:
            post_id: Post ID
            page: Zero-based page number
            size: Page size

        Returns:
            Root comments in server order, replies unmaterialized
        """
        raise NotImplementedError

    async def list_replies(self, comment_id: CommentId) -> list[CommentNode]:
        """Fetch the direct replies of a comment (one level deep).

        Args:
            comment_id: Parent comment ID

        Returns:
            Direct replies in server order, their own replies unmaterialized
        """
        raise NotImplementedError

    async def get_comment(self, comment_id: CommentId) -> CommentNode:
        """Fetch a single comment.

        Args:
            comment_id: Comment ID

        Returns:
            The comment
        """
        raise NotImplementedError

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        author_id: UserId,
        parent_id: CommentId | None = None,
    ) -> CommentNode:
        """Persist a new comment or reply.

        Args:
            post_id: Post ID
            content: Comment text
            author_id: Acting user ID
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Persisted comment with server-assigned ID and timestamps
        """
        raise NotImplementedError

    async def update_comment(
        self, comment_id: CommentId, content: str, author_id: UserId
    ) -> CommentNode:
        """Persist new text for a comment.

        Args:
            comment_id: Comment ID
            content: New text content
            author_id: Acting user ID

        Returns:
            Persisted comment
        """
        raise NotImplementedError

    async def delete_comment(self, comment_id: CommentId, author_id: UserId) -> None:
        """Soft-delete a comment on the server.

        Args:
            comment_id: Comment ID
            author_id: Acting user ID
        """
        raise NotImplementedError
