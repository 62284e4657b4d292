"""
Data Services - Business logic layer
"""

from .bulk_replace import BulkReplace, ReplaceMoviesError
from .movie_service import MovieService, RatingProjectionError
from .partial_update import PartialUpdateError, merge_partial_movie
from .repository import (
    MovieNotFoundError,
    MoviesRepository,
    SQLAlchemyMoviesRepository,
    compute_rating,
)

__all__ = [
    "BulkReplace",
    "MovieNotFoundError",
    "MovieService",
    "MoviesRepository",
    "PartialUpdateError",
    "RatingProjectionError",
    "ReplaceMoviesError",
    "SQLAlchemyMoviesRepository",
    "compute_rating",
    "merge_partial_movie",
]
