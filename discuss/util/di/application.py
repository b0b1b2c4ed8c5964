"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.thread import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetThreadViewUseCase,
    LoadThreadUseCase,
    SetFormStateUseCase,
    ToggleRepliesUseCase,
    UpdateCommentUseCase,
)
from discuss.config import BackendSettings
from discuss.domain.service import (
    CommentBackend,
    ThreadService,
    TreeStore,
    ViewProjector,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_load_thread_use_case(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        view_projector: ViewProjector,
        backend_settings: BackendSettings,
    ) -> LoadThreadUseCase:
        """Provide load thread use case."""
        return LoadThreadUseCase(
            thread_service=thread_service,
            comment_backend=comment_backend,
            view_projector=view_projector,
            root_page_size=backend_settings.root_page_size,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_thread_view_use_case(
        self, thread_service: ThreadService, view_projector: ViewProjector
    ) -> GetThreadViewUseCase:
        """Provide get thread view use case."""
        return GetThreadViewUseCase(
            thread_service=thread_service, view_projector=view_projector
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            thread_service=thread_service,
            comment_backend=comment_backend,
            tree_store=tree_store,
            view_projector=view_projector,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            thread_service=thread_service,
            comment_backend=comment_backend,
            tree_store=tree_store,
            view_projector=view_projector,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            thread_service=thread_service,
            comment_backend=comment_backend,
            tree_store=tree_store,
            view_projector=view_projector,
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_replies_use_case(
        self,
        thread_service: ThreadService,
        comment_backend: CommentBackend,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> ToggleRepliesUseCase:
        """Provide toggle replies use case."""
        return ToggleRepliesUseCase(
            thread_service=thread_service,
            comment_backend=comment_backend,
            tree_store=tree_store,
            view_projector=view_projector,
        )

    @provide(scope=Scope.REQUEST)
    def get_set_form_state_use_case(
        self,
        thread_service: ThreadService,
        tree_store: TreeStore,
        view_projector: ViewProjector,
    ) -> SetFormStateUseCase:
        """Provide set form state use case."""
        return SetFormStateUseCase(
            thread_service=thread_service,
            tree_store=tree_store,
            view_projector=view_projector,
        )
