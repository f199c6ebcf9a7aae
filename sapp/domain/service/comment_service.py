"""Comment domain service."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

import logfire

from sapp.domain.error import NotAuthorizedError, NotFoundError
from sapp.domain.model import Comment
from sapp.domain.repository import CommentRepository, PostRepository, UserRepository
from sapp.domain.value import CommentId, PostId, UserId, UserName

from .base import Service


@dataclass
class CommentNode:
    """Node in a post's comment thread.

    References to the author, post and parent are flattened to their IDs.
    The author's user name is carried alongside for display; it is None
    when the author no longer exists.
    """

    comment_id: CommentId
    content: str
    created_at: datetime
    author_id: UserId
    author_user_name: UserName | None
    post_id: PostId
    parent_id: CommentId | None
    replies: list["CommentNode"] = field(default_factory=list)

    @classmethod
    def from_comment(
        cls, comment: Comment, author_user_name: UserName | None = None
    ) -> "CommentNode":
        return cls(
            comment_id=comment.id,
            content=comment.content,
            created_at=comment.created_at,
            author_id=comment.author_id,
            author_user_name=author_user_name,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
        )


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        post_repository: PostRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            user_repository: User repository
            post_repository: Post repository
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.post_repository = post_repository

    async def add_comment(
        self,
        user_id: UserId,
        post_id: PostId,
        content: str,
        parent_comment_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        The parent is only checked for existence; it is not required to
        belong to the same post.

        Args:
            user_id: Author user ID
            post_id: Post ID
            content: Comment text
            parent_comment_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the user, post or parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.add_comment",
            user_id=str(user_id),
            post_id=str(post_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))

            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            if parent_comment_id:
                parent = await self.comment_repository.find_by_id(parent_comment_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_comment_id=str(parent_comment_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_comment_id))

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=user_id,
                content=content,
                parent_id=parent_comment_id,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_comment_id is not None,
            )
            return saved

    async def get_post_comments(self, post_id: PostId) -> list[CommentNode]:
        """Build the comment thread of a post.

        Top-level comments come newest first; replies at every depth come
        oldest first. The tree is assembled breadth-first with an explicit
        queue, issuing one children query per node. Author names are looked
        up once per distinct author.

        Args:
            post_id: Post ID

        Returns:
            Top-level comment nodes with their replies embedded
        """
        with logfire.span("comment_service.get_post_comments", post_id=str(post_id)):
            user_names: dict[UserId, UserName | None] = {}

            async def to_node(comment: Comment) -> CommentNode:
                if comment.author_id not in user_names:
                    author = await self.user_repository.find_by_id(comment.author_id)
                    user_names[comment.author_id] = author.user_name if author else None
                return CommentNode.from_comment(
                    comment, user_names[comment.author_id]
                )

            top_level = await self.comment_repository.find_top_level_by_post(post_id)
            roots = [await to_node(c) for c in top_level]

            pending: deque[CommentNode] = deque(roots)
            node_count = 0
            while pending:
                node = pending.popleft()
                node_count += 1
                children = await self.comment_repository.find_children(node.comment_id)
                for child in children:
                    child_node = await to_node(child)
                    node.replies.append(child_node)
                    pending.append(child_node)

            logfire.info(
                "Comment thread built",
                post_id=str(post_id),
                top_level_count=len(roots),
                total_count=node_count,
                author_count=len(user_names),
            )
            return roots

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def delete_comment(
        self, comment_id: CommentId, requester_user_id: UserId
    ) -> None:
        """Delete a comment authored by the requester.

        Args:
            comment_id: Comment ID
            requester_user_id: Authenticated caller

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requester_user_id=str(requester_user_id),
        ):
            comment = await self._get_owned_comment(comment_id, requester_user_id)
            await self.comment_repository.delete(comment.id)
            logfire.info("Comment deleted", comment_id=str(comment_id))

    async def update_comment(
        self, comment_id: CommentId, requester_user_id: UserId, new_content: str
    ) -> Comment:
        """Replace the content of a comment authored by the requester.

        ``created_at`` is left untouched.

        Args:
            comment_id: Comment ID
            requester_user_id: Authenticated caller
            new_content: Replacement text

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            requester_user_id=str(requester_user_id),
            content_length=len(new_content),
        ):
            comment = await self._get_owned_comment(comment_id, requester_user_id)
            updated = await self.comment_repository.save(
                comment.model_copy(update={"content": new_content})
            )
            logfire.info("Comment updated", comment_id=str(comment_id))
            return updated

    async def get_comments_count(self, post_id: PostId) -> int:
        """Count every comment on a post, replies included.

        Args:
            post_id: Post ID

        Returns:
            Number of comments
        """
        with logfire.span("comment_service.get_comments_count", post_id=str(post_id)):
            return await self.comment_repository.count_by_post(post_id)

    async def _get_owned_comment(
        self, comment_id: CommentId, requester_user_id: UserId
    ) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))

        if not comment.is_owned_by(requester_user_id):
            logfire.warn(
                "Comment ownership check failed",
                comment_id=str(comment_id),
                author_id=str(comment.author_id),
                requester_user_id=str(requester_user_id),
            )
            raise NotAuthorizedError("comment", str(comment_id), str(requester_user_id))

        return comment
