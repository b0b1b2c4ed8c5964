"""Test configuration and fixtures."""

import pytest

from discuss.domain.model import Forest
from discuss.domain.value import PostId
from tests.factories import make_comment


@pytest.fixture
def sample_forest() -> Forest:
    """Forest used across tree store and projector tests.

    1 (2 replies, loaded)
    ├── 2 (1 reply, not loaded)
    └── 3 (no replies, loaded)
    4 (no replies, not loaded)
    """
    return Forest(
        post_id=PostId(10),
        roots=(
            make_comment(
                1,
                reply_count=2,
                children=(
                    make_comment(2, parent_id=1, reply_count=1),
                    make_comment(3, parent_id=1, children=()),
                ),
            ),
            make_comment(4),
        ),
    )
