"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from sapp.domain.error import NotAuthorizedError, NotFoundError
from sapp.domain.model import Comment
from sapp.domain.repository import CommentRepository, PostRepository, UserRepository
from sapp.domain.service import CommentService
from sapp.domain.value import CommentId, PostId, UserId
from tests.conftest import make_post, make_user, minutes_ago
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _seed_user_and_post(unit_env):
    user_repo = await unit_env.get(UserRepository)
    post_repo = await unit_env.get(PostRepository)
    user = await user_repo.save(make_user())
    post = await post_repo.save(make_post(user.id))
    return user, post


def _comment(post_id, author_id, content, created_at, parent_id=None) -> Comment:
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id,
        content=content,
        parent_id=parent_id,
        created_at=created_at,
    )


class TestAddComment:
    """Tests for add_comment method."""

    @pytest.mark.asyncio
    async def test_add_top_level_comment(self, unit_env):
        """Top-level comment is saved without a parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user, post = await _seed_user_and_post(unit_env)

        # Act
        result = await comment_service.add_comment(user.id, post.id, "First!")

        # Assert
        assert result.parent_id is None
        assert result.content == "First!"
        assert result.author_id == user.id
        assert result.post_id == post.id
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_add_reply_links_parent(self, unit_env):
        """Reply points at its parent comment."""
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        parent = await comment_service.add_comment(user.id, post.id, "Parent")

        reply = await comment_service.add_comment(
            user.id, post.id, "Reply", parent_comment_id=parent.id
        )

        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_add_comment_unknown_user_raises(self, unit_env):
        """Missing author is rejected before anything is written."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        _, post = await _seed_user_and_post(unit_env)

        with pytest.raises(NotFoundError, match="User not found"):
            await comment_service.add_comment(UserId(uuid4()), post.id, "Hello")

        assert await comment_repo.count_by_post(post.id) == 0

    @pytest.mark.asyncio
    async def test_add_comment_unknown_post_raises(self, unit_env):
        """Missing post is rejected."""
        comment_service = await unit_env.get(CommentService)
        user, _ = await _seed_user_and_post(unit_env)

        with pytest.raises(NotFoundError, match="Post not found"):
            await comment_service.add_comment(user.id, PostId(uuid4()), "Hello")

    @pytest.mark.asyncio
    async def test_add_comment_unknown_parent_raises(self, unit_env):
        """Missing parent comment is rejected."""
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)

        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await comment_service.add_comment(
                user.id, post.id, "Reply", parent_comment_id=CommentId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_add_reply_to_comment_on_other_post_is_accepted(self, unit_env):
        """Parent is only checked for existence, not for post membership."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        user, post = await _seed_user_and_post(unit_env)
        other_post = await post_repo.save(make_post(user.id, "Other"))
        parent = await comment_service.add_comment(user.id, other_post.id, "Elsewhere")

        reply = await comment_service.add_comment(
            user.id, post.id, "Reply", parent_comment_id=parent.id
        )

        assert reply.post_id == post.id
        assert reply.parent_id == parent.id


class TestGetPostComments:
    """Tests for get_post_comments method."""

    @pytest.mark.asyncio
    async def test_thread_ordering_and_depth(self, unit_env):
        """Top-level newest first, replies oldest first, any depth."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user, post = await _seed_user_and_post(unit_env)

        older = await comment_repo.save(
            _comment(post.id, user.id, "older", minutes_ago(60))
        )
        newer = await comment_repo.save(
            _comment(post.id, user.id, "newer", minutes_ago(10))
        )
        late_reply = await comment_repo.save(
            _comment(post.id, user.id, "late reply", minutes_ago(5), older.id)
        )
        early_reply = await comment_repo.save(
            _comment(post.id, user.id, "early reply", minutes_ago(50), older.id)
        )
        nested = await comment_repo.save(
            _comment(post.id, user.id, "nested", minutes_ago(40), early_reply.id)
        )
        deepest = await comment_repo.save(
            _comment(post.id, user.id, "deepest", minutes_ago(30), nested.id)
        )

        # Act
        thread = await comment_service.get_post_comments(post.id)

        # Assert
        assert [n.comment_id for n in thread] == [newer.id, older.id]
        assert thread[0].replies == []

        older_node = thread[1]
        assert [n.comment_id for n in older_node.replies] == [
            early_reply.id,
            late_reply.id,
        ]
        nested_node = older_node.replies[0].replies[0]
        assert nested_node.comment_id == nested.id
        assert nested_node.parent_id == early_reply.id
        assert [n.comment_id for n in nested_node.replies] == [deepest.id]
        assert nested_node.replies[0].replies == []

    @pytest.mark.asyncio
    async def test_thread_nodes_carry_flattened_references(self, unit_env):
        """Nodes expose author, post and parent as IDs."""
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        parent = await comment_service.add_comment(user.id, post.id, "Parent")
        await comment_service.add_comment(
            user.id, post.id, "Child", parent_comment_id=parent.id
        )

        thread = await comment_service.get_post_comments(post.id)

        child = thread[0].replies[0]
        assert child.author_id == user.id
        assert child.post_id == post.id
        assert child.parent_id == parent.id
        assert child.content == "Child"

    @pytest.mark.asyncio
    async def test_thread_nodes_carry_author_user_name(self, unit_env):
        """Every node names its author, top-level and nested alike."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        alice, post = await _seed_user_and_post(unit_env)
        dave = await user_repo.save(make_user("dave"))
        top = await comment_service.add_comment(alice.id, post.id, "Top")
        reply = await comment_service.add_comment(
            dave.id, post.id, "Reply", parent_comment_id=top.id
        )
        await comment_service.add_comment(
            alice.id, post.id, "Nested", parent_comment_id=reply.id
        )

        # Act
        thread = await comment_service.get_post_comments(post.id)

        # Assert
        assert str(thread[0].author_user_name) == "alice"
        assert str(thread[0].replies[0].author_user_name) == "dave"
        assert str(thread[0].replies[0].replies[0].author_user_name) == "alice"

    @pytest.mark.asyncio
    async def test_thread_node_of_unknown_author_has_no_user_name(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        _, post = await _seed_user_and_post(unit_env)
        await comment_repo.save(
            _comment(post.id, UserId(uuid4()), "ghost", minutes_ago(1))
        )

        thread = await comment_service.get_post_comments(post.id)

        assert thread[0].author_user_name is None

    @pytest.mark.asyncio
    async def test_post_without_comments_returns_empty_list(self, unit_env):
        """No comments gives an empty thread."""
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.get_post_comments(PostId(uuid4())) == []

    @pytest.mark.asyncio
    async def test_thread_excludes_other_posts(self, unit_env):
        """Only the requested post's comments appear."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        user, post = await _seed_user_and_post(unit_env)
        other_post = await post_repo.save(make_post(user.id, "Other"))
        await comment_service.add_comment(user.id, other_post.id, "Elsewhere")
        mine = await comment_service.add_comment(user.id, post.id, "Here")

        thread = await comment_service.get_post_comments(post.id)

        assert [n.comment_id for n in thread] == [mine.id]


class TestGetCommentById:
    """Tests for get_comment_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        comment = await comment_service.add_comment(user.id, post.id, "Hi")

        assert await comment_service.get_comment_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.get_comment_by_id(CommentId(uuid4())) is None


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_delete(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        comment = await comment_service.add_comment(user.id, post.id, "Bye")

        await comment_service.delete_comment(comment.id, user.id)

        assert await comment_service.get_comment_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        """Foreign delete fails and the comment survives."""
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        comment = await comment_service.add_comment(user.id, post.id, "Mine")
        intruder = UserId(uuid4())

        with pytest.raises(NotAuthorizedError) as exc_info:
            await comment_service.delete_comment(comment.id, intruder)

        assert exc_info.value.resource == "comment"
        assert exc_info.value.user_id == str(intruder)
        assert await comment_service.get_comment_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()), UserId(uuid4()))


class TestUpdateComment:
    """Tests for update_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_update_content(self, unit_env):
        """Content changes while created_at stays put."""
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        comment = await comment_service.add_comment(user.id, post.id, "Draft")

        updated = await comment_service.update_comment(comment.id, user.id, "Final")

        assert updated.content == "Final"
        assert updated.id == comment.id
        assert updated.created_at == comment.created_at
        stored = await comment_service.get_comment_by_id(comment.id)
        assert stored.content == "Final"

    @pytest.mark.asyncio
    async def test_non_author_cannot_update(self, unit_env):
        """Foreign update fails and the content is unchanged."""
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        comment = await comment_service.add_comment(user.id, post.id, "Original")

        with pytest.raises(NotAuthorizedError):
            await comment_service.update_comment(comment.id, UserId(uuid4()), "Hacked")

        stored = await comment_service.get_comment_by_id(comment.id)
        assert stored.content == "Original"

    @pytest.mark.asyncio
    async def test_update_missing_comment_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.update_comment(
                CommentId(uuid4()), UserId(uuid4()), "Text"
            )


class TestGetCommentsCount:
    """Tests for get_comments_count method."""

    @pytest.mark.asyncio
    async def test_count_includes_replies(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user, post = await _seed_user_and_post(unit_env)
        top = await comment_service.add_comment(user.id, post.id, "Top")
        reply = await comment_service.add_comment(
            user.id, post.id, "Reply", parent_comment_id=top.id
        )
        await comment_service.add_comment(
            user.id, post.id, "Nested", parent_comment_id=reply.id
        )

        assert await comment_service.get_comments_count(post.id) == 3

    @pytest.mark.asyncio
    async def test_count_is_zero_without_comments(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.get_comments_count(PostId(uuid4())) == 0
