"""Comment backend infrastructure providers."""

from dishka import Scope, provide

from discuss.adapter.backend import HttpCommentBackend
from discuss.config import BackendSettings
from discuss.domain.service import CommentBackend
from discuss.util.di.base import ProviderBase
from discuss.util.error import ConfigurationError


class BackendProvider(ProviderBase):
    """Comment backend component base."""

    __mock_component__ = "backend"


class ProdBackendProvider(BackendProvider):
    """Production comment backend provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_comment_backend(self, backend_settings: BackendSettings) -> CommentBackend:
        """Provide HTTP comment backend client.

        Raises:
            ConfigurationError: If the backend URL is not configured
        """
        if not backend_settings.base_url:
            raise ConfigurationError("Comment backend base URL must be configured")

        return HttpCommentBackend(
            base_url=backend_settings.base_url,
            timeout=backend_settings.timeout,
        )
