"""Unit tests for LoadThreadUseCase and GetThreadViewUseCase."""

import pytest

from discuss.adapter.backend import MockCommentBackend
from discuss.application.usecase.thread import (
    GetThreadViewRequest,
    GetThreadViewUseCase,
    LoadThreadRequest,
    LoadThreadUseCase,
    ToggleRepliesRequest,
    ToggleRepliesUseCase,
)
from discuss.domain.error import NotFoundError
from discuss.domain.service import ThreadService
from discuss.domain.value import PostId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - in-memory backend
unit_env = create_env_fixture()


class TestLoadThreadUseCase:
    """Tests for LoadThreadUseCase."""

    @pytest.mark.asyncio
    async def test_load_thread_shows_roots_with_unloaded_replies(self, unit_env):
        """Default load fetches one page of roots only."""
        # Arrange
        backend = await unit_env.get(MockCommentBackend)
        use_case = await unit_env.get(LoadThreadUseCase)

        root = await backend.create_comment(PostId(1), "Root", UserId(1))
        await backend.create_comment(PostId(1), "Reply", UserId(2), parent_id=root.id)
        await backend.create_comment(PostId(1), "Second root", UserId(2))

        # Act
        view = await use_case.execute(LoadThreadRequest(post_id=1, viewer_id=1))

        # Assert
        assert view.root_count == 2
        assert [item.body for item in view.items] == ["Root", "Second root"]
        first = view.items[0]
        assert first.reply_count == 1
        assert first.loaded_reply_count is None
        assert first.can_load_replies is True
        assert first.can_modify is True
        assert view.items[1].can_modify is False

    @pytest.mark.asyncio
    async def test_load_thread_respects_page_size(self, unit_env):
        backend = await unit_env.get(MockCommentBackend)
        use_case = await unit_env.get(LoadThreadUseCase)
        for text in ("a", "b", "c"):
            await backend.create_comment(PostId(1), text, UserId(1))

        view = await use_case.execute(LoadThreadRequest(post_id=1, page_size=2))

        assert view.total == 2

    @pytest.mark.asyncio
    async def test_full_load_materializes_every_level(self, unit_env):
        backend = await unit_env.get(MockCommentBackend)
        use_case = await unit_env.get(LoadThreadUseCase)
        thread_service = await unit_env.get(ThreadService)

        root = await backend.create_comment(PostId(1), "Root", UserId(1))
        reply = await backend.create_comment(
            PostId(1), "Reply", UserId(1), parent_id=root.id
        )

        await use_case.execute(LoadThreadRequest(post_id=1, full=True))

        thread = await thread_service.get_thread(PostId(1))
        assert thread.forest.node_count == 2
        assert thread.forest.find(reply.id).children == ()

    @pytest.mark.asyncio
    async def test_empty_post_loads_empty_thread(self, unit_env):
        use_case = await unit_env.get(LoadThreadUseCase)

        view = await use_case.execute(LoadThreadRequest(post_id=5))

        assert view.items == []
        assert view.root_count == 0

    @pytest.mark.asyncio
    async def test_refresh_resets_expansion_by_default(self, unit_env):
        backend = await unit_env.get(MockCommentBackend)
        load = await unit_env.get(LoadThreadUseCase)
        toggle = await unit_env.get(ToggleRepliesUseCase)

        root = await backend.create_comment(PostId(1), "Root", UserId(1))
        await backend.create_comment(PostId(1), "Reply", UserId(1), parent_id=root.id)
        await load.execute(LoadThreadRequest(post_id=1))
        await toggle.execute(ToggleRepliesRequest(post_id=1, comment_id=root.id))

        view = await load.execute(LoadThreadRequest(post_id=1))

        assert view.items[0].replies_visible is False

    @pytest.mark.asyncio
    async def test_refresh_can_keep_expansion(self, unit_env):
        """Expansion survives a full refresh for comments still present."""
        backend = await unit_env.get(MockCommentBackend)
        load = await unit_env.get(LoadThreadUseCase)
        toggle = await unit_env.get(ToggleRepliesUseCase)

        root = await backend.create_comment(PostId(1), "Root", UserId(1))
        await backend.create_comment(PostId(1), "Reply", UserId(1), parent_id=root.id)
        await load.execute(LoadThreadRequest(post_id=1))
        await toggle.execute(ToggleRepliesRequest(post_id=1, comment_id=root.id))

        view = await load.execute(
            LoadThreadRequest(post_id=1, full=True, keep_expansion=True)
        )

        assert [item.body for item in view.items] == ["Root", "Reply"]
        assert view.items[0].replies_visible is True


class TestGetThreadViewUseCase:
    """Tests for GetThreadViewUseCase."""

    @pytest.mark.asyncio
    async def test_view_of_unloaded_thread_raises_not_found(self, unit_env):
        use_case = await unit_env.get(GetThreadViewUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetThreadViewRequest(post_id=1))

    @pytest.mark.asyncio
    async def test_view_reflects_loaded_thread(self, unit_env):
        backend = await unit_env.get(MockCommentBackend)
        load = await unit_env.get(LoadThreadUseCase)
        get_view = await unit_env.get(GetThreadViewUseCase)

        await backend.create_comment(PostId(1), "Root", UserId(1))
        loaded = await load.execute(LoadThreadRequest(post_id=1))

        view = await get_view.execute(GetThreadViewRequest(post_id=1))

        assert view.items == loaded.items
