"""
Database Models - Main imports
"""

from .base import Base
from .movie import Movie
from .review import Review

__all__ = ["Base", "Movie", "Review"]
