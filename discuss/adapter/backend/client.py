"""Comment backend clients.

``HttpCommentBackend`` talks to the comment REST API over HTTP.
``MockCommentBackend`` keeps comments in memory for tests and local runs.
"""

from datetime import datetime
from typing import Any

import httpx
import logfire
from pydantic import TypeAdapter, ValidationError

from discuss.adapter.backend.payload import (
    CommentPayload,
    CreateCommentPayload,
    UpdateCommentPayload,
)
from discuss.adapter.error import BackendError, BackendNotFoundError
from discuss.domain.model import CommentNode
from discuss.domain.service.backend import CommentBackend
from discuss.domain.value import AuthorRef, CommentId, CommentState, PostId, UserId

_comment_list = TypeAdapter(list[CommentPayload])


class HttpCommentBackend(CommentBackend):
    """Comment backend client over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP comment backend.

        Args:
            base_url: Base URL of the comment API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def list_comments(self, post_id: PostId) -> list[CommentNode]:
        data = await self._request("GET", f"/comments/posts/{post_id}")
        return self._parse_list(data)

    async def list_root_comments(
        self, post_id: PostId, page: int = 0, size: int = 20
    ) -> list[CommentNode]:
        data = await self._request(
            "GET",
            f"/comments/posts/{post_id}/root",
            params={"page": page, "size": size},
        )
        return self._parse_list(data)

    async def list_replies(self, comment_id: CommentId) -> list[CommentNode]:
        data = await self._request("GET", f"/comments/{comment_id}/replies")
        return self._parse_list(data)

    async def get_comment(self, comment_id: CommentId) -> CommentNode:
        data = await self._request("GET", f"/comments/{comment_id}")
        return self._parse_one(data)

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        author_id: UserId,
        parent_id: CommentId | None = None,
    ) -> CommentNode:
        body = CreateCommentPayload(
            post_id=post_id, parent_id=parent_id, content=content
        )
        data = await self._request(
            "POST",
            "/comments",
            author_id=author_id,
            json=body.model_dump(by_alias=True, exclude_none=True),
        )
        return self._parse_one(data)

    async def update_comment(
        self, comment_id: CommentId, content: str, author_id: UserId
    ) -> CommentNode:
        body = UpdateCommentPayload(content=content)
        data = await self._request(
            "PUT",
            f"/comments/{comment_id}",
            author_id=author_id,
            json=body.model_dump(by_alias=True),
        )
        return self._parse_one(data)

    async def delete_comment(self, comment_id: CommentId, author_id: UserId) -> None:
        await self._request("DELETE", f"/comments/{comment_id}", author_id=author_id)

    async def _request(
        self,
        method: str,
        path: str,
        author_id: UserId | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty).

        Raises:
            BackendNotFoundError: If the backend answers 404
            BackendError: On any other failure
        """
        headers = {"Accept": "application/json"}
        if author_id is not None:
            headers["X-User-Id"] = str(author_id)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logfire.error(
                "Comment backend HTTP error", method=method, path=path, error=str(e)
            )
            raise BackendError(f"HTTP error calling {method} {path}: {e}")

        if response.status_code == 404:
            logfire.warn("Comment backend resource not found", method=method, path=path)
            raise BackendNotFoundError(path)
        if response.status_code >= 400:
            logfire.error(
                "Comment backend request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise BackendError(
                f"{method} {path} failed: {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _parse_one(data: Any) -> CommentNode:
        try:
            return CommentPayload.model_validate(data).to_domain()
        except ValidationError as e:
            logfire.error("Malformed comment payload", error=str(e))
            raise BackendError(f"Malformed comment payload: {e}")

    @staticmethod
    def _parse_list(data: Any) -> list[CommentNode]:
        try:
            return [payload.to_domain() for payload in _comment_list.validate_python(data)]
        except ValidationError as e:
            logfire.error("Malformed comment list payload", error=str(e))
            raise BackendError(f"Malformed comment list payload: {e}")


class MockCommentBackend(CommentBackend):
    """In-memory comment backend.

    Assigns sequential IDs and keeps deleted comments as tombstones, the way
    the real backend does.
    """

    def __init__(self) -> None:
        """Initialize empty mock backend."""
        self._comments: dict[CommentId, CommentNode] = {}
        self._post_of: dict[CommentId, PostId] = {}
        self._authors: dict[UserId, AuthorRef] = {}
        self._next_id = 1

    def register_author(self, author: AuthorRef) -> None:
        """Make an author's display data known to the mock."""
        self._authors[author.id] = author

    async def list_comments(self, post_id: PostId) -> list[CommentNode]:
        def build(node: CommentNode) -> CommentNode:
            children = tuple(build(child) for child in self._children_of(node.id))
            return self._with_count(node).model_copy(update={"children": children})

        return [build(root) for root in self._roots_of(post_id)]

    async def list_root_comments(
        self, post_id: PostId, page: int = 0, size: int = 20
    ) -> list[CommentNode]:
        roots = self._roots_of(post_id)[page * size : (page + 1) * size]
        return [self._with_count(root) for root in roots]

    async def list_replies(self, comment_id: CommentId) -> list[CommentNode]:
        self._require(comment_id)
        return [self._with_count(child) for child in self._children_of(comment_id)]

    async def get_comment(self, comment_id: CommentId) -> CommentNode:
        return self._with_count(self._require(comment_id))

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        author_id: UserId,
        parent_id: CommentId | None = None,
    ) -> CommentNode:
        if parent_id is not None:
            parent = self._require(parent_id)
            if self._post_of[parent.id] != post_id:
                raise BackendError(
                    "Parent comment does not belong to this post", status_code=400
                )
            if parent.is_deleted:
                raise BackendError("Cannot reply to a deleted comment", status_code=400)

        comment = CommentNode(
            id=CommentId(self._next_id),
            parent_id=parent_id,
            author=self._author(author_id),
            body=content,
            created_at=datetime.now(),
        )
        self._next_id += 1
        self._comments[comment.id] = comment
        self._post_of[comment.id] = post_id
        return comment

    async def update_comment(
        self, comment_id: CommentId, content: str, author_id: UserId
    ) -> CommentNode:
        comment = self._require(comment_id)
        self._check_author(comment, author_id)
        if comment.is_deleted:
            raise BackendError("Cannot edit a deleted comment", status_code=400)
        updated = comment.model_copy(
            update={"body": content, "edited_at": datetime.now()}
        )
        self._comments[comment_id] = updated
        return self._with_count(updated)

    async def delete_comment(self, comment_id: CommentId, author_id: UserId) -> None:
        comment = self._require(comment_id)
        self._check_author(comment, author_id)
        self._comments[comment_id] = comment.model_copy(
            update={"state": CommentState.DELETED, "body": ""}
        )

    def _require(self, comment_id: CommentId) -> CommentNode:
        comment = self._comments.get(comment_id)
        if comment is None:
            raise BackendNotFoundError(f"/comments/{comment_id}")
        return comment

    def _author(self, author_id: UserId) -> AuthorRef:
        return self._authors.get(author_id) or AuthorRef(
            id=author_id, username=f"user{author_id}"
        )

    @staticmethod
    def _check_author(comment: CommentNode, author_id: UserId) -> None:
        if comment.author.id != author_id:
            raise BackendError("Not the author of this comment", status_code=403)

    def _roots_of(self, post_id: PostId) -> list[CommentNode]:
        return [
            c
            for c in self._comments.values()
            if c.parent_id is None and self._post_of[c.id] == post_id
        ]

    def _children_of(self, comment_id: CommentId) -> list[CommentNode]:
        return [c for c in self._comments.values() if c.parent_id == comment_id]

    def _with_count(self, comment: CommentNode) -> CommentNode:
        return comment.model_copy(
            update={"direct_reply_count": len(self._children_of(comment.id))}
        )
