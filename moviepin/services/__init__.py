"""
Services Package - Main imports
"""

from .data import MovieService, MoviesRepository, SQLAlchemyMoviesRepository

__all__ = [
    "MovieService",
    "MoviesRepository",
    "SQLAlchemyMoviesRepository",
]
