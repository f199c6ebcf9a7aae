"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

from pydantic import field_validator

from sapp.domain.value.common import RootValueObject, ValueObject


class UserName(RootValueObject[str]):
    """Public user name shown next to authored content."""

    @field_validator("root")
    @classmethod
    def validate_user_name(cls, v: str) -> str:
        """Validate user name is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("User name must be 1-255 characters")
        return v


class LearningPathContentDraft(ValueObject):
    """Caller-supplied description of a content item to add to a path.

    The ordinal is taken as given: it is neither checked for uniqueness
    nor for contiguity within the path.
    """

    title: str
    description: str | None = None
    url: str | None = None
    ordinal: int
