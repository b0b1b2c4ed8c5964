"""Strongly typed identifiers for thread entities.

The comment backend assigns integer identifiers. NewType keeps comment,
post and user ids from being mixed up.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
PostId = NewType("PostId", int)
UserId = NewType("UserId", int)
