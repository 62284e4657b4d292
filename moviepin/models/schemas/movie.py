"""
Movie Pydantic Schemas
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import NonEmptyStr, RFC3339Datetime


class Movie(BaseModel):
    """A movie record, every field required"""
    id: UUID
    title: NonEmptyStr
    release_date: RFC3339Datetime
    genre: NonEmptyStr
    director: NonEmptyStr
    description: NonEmptyStr

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: UUID) -> UUID:
        if v.int == 0:
            raise ValueError("id is required")
        return v


class MovieReview(Movie):
    """Movie with the average rating of its reviews"""
    # None when the movie has no reviews yet
    rating: Optional[float] = Field(None, ge=0.0, le=5.0)


class AddMoviesResponse(BaseModel):
    """Outcome of adding a batch of movies"""
    added_movies: List[Movie] = []
    failed_movies: List[Movie] = []
