"""Unit tests for the in-memory comment repository."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from sapp.domain.model import Comment
from sapp.domain.value import CommentId, PostId, UserId
from sapp.persistence.repository.inmemory import InMemoryCommentRepository


def _comment(post_id, hours_ago, parent_id=None) -> Comment:
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=UserId(uuid4()),
        content="text",
        parent_id=parent_id,
        created_at=datetime.now() - timedelta(hours=hours_ago),
    )


class TestInMemoryCommentRepository:
    """Unit tests for InMemoryCommentRepository ordering and counting."""

    @pytest.mark.asyncio
    async def test_top_level_newest_first(self):
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        old = await repo.save(_comment(post_id, 3))
        new = await repo.save(_comment(post_id, 1))
        await repo.save(_comment(post_id, 0, parent_id=old.id))

        assert await repo.find_top_level_by_post(post_id) == [new, old]

    @pytest.mark.asyncio
    async def test_children_oldest_first(self):
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        parent = await repo.save(_comment(post_id, 5))
        late = await repo.save(_comment(post_id, 1, parent_id=parent.id))
        early = await repo.save(_comment(post_id, 4, parent_id=parent.id))

        assert await repo.find_children(parent.id) == [early, late]
        assert await repo.find_children(late.id) == []

    @pytest.mark.asyncio
    async def test_count_by_post_includes_replies(self):
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        parent = await repo.save(_comment(post_id, 2))
        await repo.save(_comment(post_id, 1, parent_id=parent.id))
        await repo.save(_comment(PostId(uuid4()), 1))

        assert await repo.count_by_post(post_id) == 2
