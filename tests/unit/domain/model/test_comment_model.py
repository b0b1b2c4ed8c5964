"""Unit tests for CommentNode and Forest models."""

import pytest
from pydantic import ValidationError

from discuss.domain.error import InvalidStateError
from discuss.domain.model import Forest
from discuss.domain.value import CommentId, CommentState, PostId
from tests.factories import make_author, make_chain, make_comment


class TestCommentNode:
    """Tests for CommentNode model."""

    def test_unloaded_and_empty_children_are_distinct(self):
        """None means not loaded, () means loaded with no replies."""
        unloaded = make_comment(1, reply_count=2)
        empty = make_comment(2, children=())

        assert unloaded.is_materialized is False
        assert unloaded.has_unloaded_replies is True
        assert empty.is_materialized is True
        assert empty.has_unloaded_replies is False

    def test_leaf_without_replies_has_nothing_to_load(self):
        assert make_comment(1).has_unloaded_replies is False

    def test_has_more_replies_when_partially_loaded(self):
        node = make_comment(
            1, reply_count=3, children=(make_comment(2, parent_id=1),)
        )

        assert node.has_more_replies is True

    def test_deleted_comment_with_body_is_rejected(self):
        """Tombstones never carry text."""
        with pytest.raises(ValidationError):
            make_comment(1, body="still here", state=CommentState.DELETED)

    def test_negative_reply_count_is_rejected(self):
        with pytest.raises(ValidationError):
            make_comment(1, reply_count=-1)

    def test_comment_is_immutable(self):
        node = make_comment(1)

        with pytest.raises(ValidationError):
            node.body = "changed"


class TestAuthorRef:
    """Tests for AuthorRef value object."""

    def test_display_name_prefers_nickname(self):
        author = make_author(1).model_copy(update={"nickname": "Ada"})

        assert author.display_name == "Ada"

    def test_display_name_falls_back_to_username(self):
        assert make_author(1, username="ada").display_name == "ada"


class TestForest:
    """Tests for Forest model."""

    def test_walk_is_pre_order_with_depths(self, sample_forest):
        walked = [(node.id, depth) for node, depth in sample_forest.walk()]

        assert walked == [(1, 0), (2, 1), (3, 1), (4, 0)]

    def test_node_count_includes_only_materialized_nodes(self, sample_forest):
        assert sample_forest.node_count == 4

    def test_find_and_contains(self, sample_forest):
        assert sample_forest.find(CommentId(3)).parent_id == 1
        assert sample_forest.contains(CommentId(4))
        assert not sample_forest.contains(CommentId(99))

    def test_duplicate_id_is_rejected(self):
        """A comment is owned by exactly one parent."""
        with pytest.raises(ValidationError, match="more than once"):
            Forest(
                post_id=PostId(1),
                roots=(
                    make_comment(1, children=(make_comment(2, parent_id=1),)),
                    make_comment(3, children=(make_comment(2, parent_id=3),)),
                ),
            )

    def test_parent_mismatch_is_rejected(self):
        with pytest.raises(ValidationError, match="expected 1"):
            Forest(
                post_id=PostId(1),
                roots=(make_comment(1, children=(make_comment(2, parent_id=7),)),),
            )

    def test_root_with_parent_is_rejected(self):
        with pytest.raises(ValidationError):
            Forest(post_id=PostId(1), roots=(make_comment(1, parent_id=5),))

    def test_build_accepts_backend_roots(self):
        forest = Forest.build(PostId(1), [make_comment(1), make_comment(2)])

        assert [root.id for root in forest.roots] == [1, 2]

    def test_build_reports_broken_structure_as_invalid_state(self):
        with pytest.raises(InvalidStateError):
            Forest.build(PostId(1), [make_comment(1), make_comment(1)])

    def test_deep_chain_validates_and_walks(self):
        """Validation and traversal do not recurse per level."""
        forest = Forest(post_id=PostId(1), roots=(make_chain(2000),))

        assert forest.node_count == 2000
