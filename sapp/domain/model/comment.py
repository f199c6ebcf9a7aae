"""Comment entity.

Comments are threaded discussions on posts. A comment without a parent is
a top-level comment; replies point at their parent through ``parent_id``,
forming a tree of arbitrary depth.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from sapp.domain.model.common import DomainModel
from sapp.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)

    def is_owned_by(self, user_id: UserId) -> bool:
        """Whether ``user_id`` is the author of this comment."""
        return self.author_id == user_id
