"""Learning path aggregate.

A learning path is a user-curated, ordered list of content items with
per-item completion tracking. The path entity itself never carries its
contents; they are always read through the content repository so the
ordering and the completion counts come from the store.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from sapp.domain.model.common import DomainModel
from sapp.domain.value import LearningPathContentId, LearningPathId, UserId


class LearningPath(DomainModel):
    """Learning path aggregate root."""

    id: LearningPathId
    name: str
    tag: int  # Category code, opaque to the domain
    owner_id: UserId

    def is_owned_by(self, user_id: UserId) -> bool:
        """Whether ``user_id`` owns this learning path."""
        return self.owner_id == user_id


class LearningPathContent(DomainModel):
    """A single content item inside a learning path.

    ``updated_at`` is set on creation and refreshed every time the
    completion flag changes.
    """

    id: LearningPathContentId
    learning_path_id: LearningPathId
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    ordinal: int
    is_completed: bool = False
    updated_at: datetime = Field(default_factory=datetime.now)
