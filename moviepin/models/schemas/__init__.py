"""
Pydantic Schemas - Main imports
"""

from .common import ErrorResponse, NonEmptyStr, RFC3339Datetime, TimestampMixin, parse_rfc3339
from .movie import AddMoviesResponse, Movie, MovieReview
from .review import Review

__all__ = [
    # Common
    "ErrorResponse", "NonEmptyStr", "RFC3339Datetime", "TimestampMixin", "parse_rfc3339",

    # Movie
    "Movie", "MovieReview", "AddMoviesResponse",

    # Review
    "Review",
]
