"""Unit tests for row mappers."""

from datetime import datetime
from uuid import uuid4

from sapp.domain.model import LearningPathContent, User
from sapp.domain.value import LearningPathContentId, LearningPathId, UserId, UserName
from sapp.persistence.mappers import (
    learning_path_content_to_dict,
    row_to_comment,
    row_to_learning_path,
    row_to_learning_path_content,
    user_to_dict,
)


class TestMappers:
    """Unit tests for row/model conversion."""

    def test_row_to_comment_accepts_string_ids_and_null_parent(self):
        comment_id = uuid4()
        row = {
            "id": str(comment_id),
            "post_id": str(uuid4()),
            "author_id": uuid4(),
            "content": "hello",
            "parent_id": None,
            "created_at": datetime(2024, 1, 1, 12, 0),
        }

        comment = row_to_comment(row)

        assert comment.id == comment_id
        assert comment.parent_id is None
        assert comment.content == "hello"

    def test_row_to_learning_path(self):
        owner_id = uuid4()
        row = {"id": uuid4(), "name": "Rust Basics", "tag": 3, "owner_id": owner_id}

        path = row_to_learning_path(row)

        assert path.name == "Rust Basics"
        assert path.tag == 3
        assert path.is_owned_by(UserId(owner_id))

    def test_learning_path_content_dict_matches_row_shape(self):
        content = LearningPathContent(
            id=LearningPathContentId(uuid4()),
            learning_path_id=LearningPathId(uuid4()),
            title="Ownership",
            description=None,
            url="https://doc.rust-lang.org/book/ch04",
            ordinal=2,
            is_completed=True,
            updated_at=datetime(2024, 1, 1, 12, 0),
        )

        assert row_to_learning_path_content(learning_path_content_to_dict(content)) == (
            content
        )

    def test_user_dict_flattens_user_name(self):
        user = User(id=UserId(uuid4()), user_name=UserName("alice"))

        assert user_to_dict(user)["user_name"] == "alice"
