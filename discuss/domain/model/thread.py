"""Thread session entity."""

from datetime import datetime

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.model.expansion import ExpansionState
from discuss.domain.model.forest import Forest
from discuss.domain.value import PostId


class Thread(DomainModel):
    """The comment forest of one post plus the UI state of the view showing it.

    One Thread is used by exactly one view at a time. Backend acknowledgments
    are applied to it sequentially, each one replacing ``forest`` with the
    snapshot returned by the tree store.
    """

    post_id: PostId
    forest: Forest
    expansion: ExpansionState = Field(default_factory=ExpansionState)
    loaded_at: datetime = Field(default_factory=datetime.now)

    def with_forest(self, forest: Forest) -> "Thread":
        return self.model_copy(update={"forest": forest})

    def with_expansion(self, expansion: ExpansionState) -> "Thread":
        return self.model_copy(update={"expansion": expansion})
