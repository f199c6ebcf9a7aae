"""User aggregate root.

Users own their posts, comments and learning paths.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from sapp.domain.model.common import DomainModel
from sapp.domain.value import UserId, UserName


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    user_name: UserName
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
