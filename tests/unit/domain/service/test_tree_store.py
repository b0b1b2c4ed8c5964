"""Unit tests for TreeStore."""

from datetime import datetime

import pytest

from discuss.domain.error import InvalidStateError, NotFoundError
from discuss.domain.model import Forest
from discuss.domain.service import TreeStore
from discuss.domain.value import CommentId, CommentState, PostId
from tests.factories import make_chain, make_comment


@pytest.fixture
def store() -> TreeStore:
    return TreeStore()


class TestCreateRoot:
    """Tests for create_root method."""

    def test_create_root_appends_to_roots(self, store, sample_forest):
        """New top-level comment goes after the existing roots."""
        result = store.create_root(sample_forest, make_comment(5))

        assert [root.id for root in result.roots] == [1, 4, 5]
        assert len(sample_forest.roots) == 2  # Input untouched

    def test_create_root_on_empty_forest(self, store):
        """First comment of a post becomes the only root."""
        forest = Forest(post_id=PostId(1))

        result = store.create_root(forest, make_comment(1))

        assert len(result.roots) == 1
        assert result.roots[0].id == 1

    def test_create_root_with_parent_fails_closed(self, store, sample_forest):
        """A comment carrying a parent is not inserted as a root."""
        with pytest.raises(InvalidStateError, match="has a parent"):
            store.create_root(sample_forest, make_comment(5, parent_id=1))

    def test_create_root_ignores_duplicate_id(self, store, sample_forest):
        """Applying the same comment twice keeps one copy."""
        result = store.create_root(sample_forest, make_comment(4))

        assert result is sample_forest


    def test_create_root_with_nested_id_already_in_forest_raises(
        self, store, sample_forest
    ):
        """Nested replies cannot reuse an id owned elsewhere."""
        new_root = make_comment(5, children=(make_comment(2, parent_id=5),))

        with pytest.raises(InvalidStateError, match="already present"):
            store.create_root(sample_forest, new_root)

    def test_create_root_keeps_consistent_nested_replies(self, store, sample_forest):
        new_root = make_comment(
            5, reply_count=1, children=(make_comment(6, parent_id=5),)
        )

        result = store.create_root(sample_forest, new_root)

        assert store.find(result, CommentId(6)).parent_id == 5
        assert Forest(post_id=result.post_id, roots=result.roots) == result

class TestCreateReply:
    """Tests for create_reply method."""

    def test_create_reply_increments_parent_reply_count_by_one(
        self, store, sample_forest
    ):
        """Parent's direct reply count goes up by exactly one."""
        result = store.create_reply(
            sample_forest, CommentId(1), make_comment(9, parent_id=1)
        )

        parent = store.find(result, CommentId(1))
        assert parent.direct_reply_count == 3
        assert [child.id for child in parent.children] == [2, 3, 9]

    def test_created_reply_is_discoverable(self, store, sample_forest):
        """New reply can be found by depth-first search afterwards."""
        result = store.create_reply(
            sample_forest, CommentId(3), make_comment(9, parent_id=3)
        )

        reply = store.find(result, CommentId(9))
        assert reply is not None
        assert reply.parent_id == 3

    def test_create_reply_materializes_unloaded_parent(self, store, sample_forest):
        """Unloaded children become a single-element sequence."""
        result = store.create_reply(
            sample_forest, CommentId(4), make_comment(9, parent_id=4)
        )

        parent = store.find(result, CommentId(4))
        assert parent.children is not None
        assert [child.id for child in parent.children] == [9]
        assert parent.direct_reply_count == 1

    def test_create_reply_fills_missing_parent_id(self, store, sample_forest):
        """Reply without parent_id takes the target's ID."""
        result = store.create_reply(sample_forest, CommentId(3), make_comment(9))

        assert store.find(result, CommentId(9)).parent_id == 3

    def test_create_reply_with_mismatched_parent_raises(self, store, sample_forest):
        """Reply naming another parent is rejected."""
        with pytest.raises(InvalidStateError):
            store.create_reply(
                sample_forest, CommentId(3), make_comment(9, parent_id=1)
            )

    def test_create_reply_to_missing_parent_raises_not_found(
        self, store, sample_forest
    ):
        """Reply to a parent absent from the forest is not inserted."""
        before = sample_forest.model_dump()

        with pytest.raises(NotFoundError, match="999"):
            store.create_reply(
                sample_forest, CommentId(999), make_comment(9, parent_id=999)
            )

        assert sample_forest.model_dump() == before
        assert store.find(sample_forest, CommentId(9)) is None

    def test_create_reply_leaves_previous_snapshot_untouched(
        self, store, sample_forest
    ):
        """Mutation produces a new forest instead of editing the old one."""
        result = store.create_reply(
            sample_forest, CommentId(1), make_comment(9, parent_id=1)
        )

        assert result is not sample_forest
        assert store.find(sample_forest, CommentId(1)).direct_reply_count == 2
        assert store.find(sample_forest, CommentId(9)) is None

    def test_create_reply_shares_untouched_subtrees(self, store, sample_forest):
        """Roots off the modified path are reused as-is."""
        result = store.create_reply(
            sample_forest, CommentId(3), make_comment(9, parent_id=3)
        )

        assert result.roots[1] is sample_forest.roots[1]

    def test_create_reply_ignores_duplicate_id(self, store, sample_forest):
        """Same reply applied twice is only inserted once."""
        reply = make_comment(9, parent_id=1)
        once = store.create_reply(sample_forest, CommentId(1), reply)

        twice = store.create_reply(once, CommentId(1), reply)

        assert twice is once
        assert store.find(twice, CommentId(1)).direct_reply_count == 3

    def test_create_reply_two_replies_same_parent_both_applied(
        self, store, sample_forest
    ):
        """Different replies with identical content are both kept."""
        forest = store.create_reply(
            sample_forest, CommentId(3), make_comment(9, parent_id=3, body="same")
        )
        forest = store.create_reply(
            forest, CommentId(3), make_comment(10, parent_id=3, body="same")
        )

        parent = store.find(forest, CommentId(3))
        assert [child.id for child in parent.children] == [9, 10]
        assert parent.direct_reply_count == 2

    def test_create_reply_deep_in_long_chain(self, store):
        """Search and rebuild work beyond the interpreter recursion limit."""
        forest = Forest(post_id=PostId(1), roots=(make_chain(1500),))

        result = store.create_reply(
            forest, CommentId(1500), make_comment(5000, parent_id=1500)
        )

        assert store.find(result, CommentId(5000)) is not None
        assert store.find(result, CommentId(1500)).direct_reply_count == 1


    def test_create_reply_with_broken_nested_parent_link_raises(
        self, store, sample_forest
    ):
        """A nested reply must name its containing comment as parent."""
        reply = make_comment(9, parent_id=3, children=(make_comment(10, parent_id=7),))

        with pytest.raises(InvalidStateError, match="belongs to"):
            store.create_reply(sample_forest, CommentId(3), reply)

        assert store.find(sample_forest, CommentId(9)) is None

class TestEditContent:
    """Tests for edit_content method."""

    def test_edit_content_updates_body_and_edited_at(self, store, sample_forest):
        """Body and edit timestamp are replaced."""
        edited_at = datetime(2025, 2, 1, 9, 30, 0)

        result = store.edit_content(
            sample_forest, CommentId(2), "Updated", edited_at=edited_at
        )

        node = store.find(result, CommentId(2))
        assert node.body == "Updated"
        assert node.edited_at == edited_at
        assert node.is_edited

    def test_edit_content_defaults_edited_at_to_now(self, store, sample_forest):
        """Edit time is filled in when the caller has none."""
        before = datetime.now()

        result = store.edit_content(sample_forest, CommentId(4), "Updated")

        assert store.find(result, CommentId(4)).edited_at >= before

    def test_edit_deleted_comment_raises_invalid_state(self, store, sample_forest):
        """Tombstones cannot be revived through an edit."""
        deleted = store.soft_delete(sample_forest, CommentId(2))
        before = deleted.model_dump()

        with pytest.raises(InvalidStateError, match="cannot be edited"):
            store.edit_content(deleted, CommentId(2), "Revived")

        assert deleted.model_dump() == before

    def test_edit_missing_comment_raises_not_found(self, store, sample_forest):
        with pytest.raises(NotFoundError):
            store.edit_content(sample_forest, CommentId(999), "Updated")


class TestSoftDelete:
    """Tests for soft_delete method."""

    def test_soft_delete_clears_body_and_keeps_children(self, store, sample_forest):
        """Deletion is a state change, not a removal."""
        original = store.find(sample_forest, CommentId(1))

        result = store.soft_delete(sample_forest, CommentId(1))

        node = store.find(result, CommentId(1))
        assert node.state == CommentState.DELETED
        assert node.body == ""
        assert node.children == original.children
        assert node.direct_reply_count == original.direct_reply_count
        assert store.find(result, CommentId(2)) is not None

    def test_soft_delete_is_idempotent(self, store, sample_forest):
        """Deleting twice equals deleting once."""
        once = store.soft_delete(sample_forest, CommentId(3))

        twice = store.soft_delete(once, CommentId(3))

        assert twice == once
        assert twice is once

    def test_soft_delete_missing_comment_raises_not_found(
        self, store, sample_forest
    ):
        with pytest.raises(NotFoundError):
            store.soft_delete(sample_forest, CommentId(999))


class TestMaterializeReplies:
    """Tests for materialize_replies method."""

    def test_materialize_replies_sets_children(self, store, sample_forest):
        """Loaded replies replace the unmaterialized children."""
        loaded = [make_comment(20, parent_id=2, reply_count=4)]

        result = store.materialize_replies(sample_forest, CommentId(2), loaded)

        node = store.find(result, CommentId(2))
        assert [child.id for child in node.children] == [20]
        assert node.children[0].children is None
        assert node.children[0].has_unloaded_replies

    def test_materialize_replies_leaves_grandchildren_unmaterialized(
        self, store, sample_forest
    ):
        """Only one level is stored, even if the payload nests deeper."""
        loaded = [
            make_comment(
                20,
                parent_id=2,
                reply_count=1,
                children=(make_comment(21, parent_id=20),),
            )
        ]

        result = store.materialize_replies(sample_forest, CommentId(2), loaded)

        assert store.find(result, CommentId(20)).children is None
        assert store.find(result, CommentId(21)) is None

    def test_materialize_replies_twice_is_idempotent(self, store, sample_forest):
        """Re-applying the same payload does not duplicate replies."""
        loaded = [make_comment(20, parent_id=2), make_comment(21, parent_id=2)]

        once = store.materialize_replies(sample_forest, CommentId(2), loaded)
        twice = store.materialize_replies(once, CommentId(2), loaded)

        assert twice == once
        assert len(store.find(twice, CommentId(2)).children) == 2

    def test_materialize_empty_payload_means_loaded_without_replies(
        self, store, sample_forest
    ):
        """Empty load is distinct from not loaded."""
        result = store.materialize_replies(sample_forest, CommentId(4), [])

        node = store.find(result, CommentId(4))
        assert node.children == ()
        assert node.is_materialized

    def test_materialize_replaces_previous_replies(self, store, sample_forest):
        """Last payload applied wins."""
        result = store.materialize_replies(
            sample_forest, CommentId(1), [make_comment(3, parent_id=1)]
        )

        assert [c.id for c in store.find(result, CommentId(1)).children] == [3]
        assert store.find(result, CommentId(2)) is None

    def test_materialize_replies_missing_parent_raises_not_found(
        self, store, sample_forest
    ):
        with pytest.raises(NotFoundError):
            store.materialize_replies(
                sample_forest, CommentId(999), [make_comment(20, parent_id=999)]
            )

    def test_materialize_replies_from_other_parent_raises(self, store, sample_forest):
        """Replies that belong elsewhere are rejected."""
        with pytest.raises(InvalidStateError, match="belongs to"):
            store.materialize_replies(
                sample_forest, CommentId(2), [make_comment(20, parent_id=4)]
            )

    def test_materialize_replies_with_repeated_id_raises(self, store, sample_forest):
        loaded = [make_comment(20, parent_id=2), make_comment(20, parent_id=2)]

        with pytest.raises(InvalidStateError, match="repeat"):
            store.materialize_replies(sample_forest, CommentId(2), loaded)

    def test_materialize_replies_with_id_present_elsewhere_raises(
        self, store, sample_forest
    ):
        """A comment cannot end up owned by two parents."""
        with pytest.raises(InvalidStateError, match="already present"):
            store.materialize_replies(
                sample_forest, CommentId(2), [make_comment(4, parent_id=2)]
            )


    def test_materialize_reply_reusing_parent_id_raises(self, store, sample_forest):
        """A reply cannot carry the id of the comment it is loaded under."""
        with pytest.raises(InvalidStateError, match="already present"):
            store.materialize_replies(
                sample_forest, CommentId(4), [make_comment(4, parent_id=4)]
            )

        assert [node.id for node, _ in sample_forest.walk()] == [1, 2, 3, 4]

class TestFind:
    """Tests for find method."""

    def test_find_does_not_look_inside_unloaded_subtrees(self, store):
        """Unmaterialized children are treated as a leaf."""
        forest = Forest(post_id=PostId(1), roots=(make_comment(1, reply_count=3),))

        assert store.find(forest, CommentId(1)) is not None
        assert store.find(forest, CommentId(2)) is None
