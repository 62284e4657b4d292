"""
Models Package - Main imports
"""

# Database models
from .database import Base, Movie, Review

# Pydantic schemas
from .schemas import (
    # Common
    ErrorResponse, RFC3339Datetime, parse_rfc3339,

    # Movie schemas
    AddMoviesResponse, Movie as MovieSchema, MovieReview as MovieReviewSchema,

    # Review schemas
    Review as ReviewSchema,
)

__all__ = [
    # Database models
    "Base", "Movie", "Review",

    # Common schemas
    "ErrorResponse", "RFC3339Datetime", "parse_rfc3339",

    # Movie schemas
    "MovieSchema", "MovieReviewSchema", "AddMoviesResponse",

    # Review schemas
    "ReviewSchema",
]
