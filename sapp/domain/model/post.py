"""Post entity."""

from datetime import datetime

from pydantic import Field

from sapp.domain.model.common import DomainModel
from sapp.domain.value import PostId, UserId


class Post(DomainModel):
    """A post that comments are attached to."""

    id: PostId
    author_id: UserId
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
