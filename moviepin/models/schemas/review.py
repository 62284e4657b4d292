"""
Review Pydantic Schemas
"""

from uuid import UUID

from pydantic import ConfigDict, Field

from .common import NonEmptyStr, TimestampMixin


class Review(TimestampMixin):
    """A user's review of a movie"""
    id: UUID
    user_id: UUID
    movie_id: UUID
    rating: float = Field(..., ge=0.0, le=10.0)
    review_text: NonEmptyStr = Field(..., max_length=500)

    model_config = ConfigDict(from_attributes=True)
