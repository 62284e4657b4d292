"""
API Package
"""

from .api import api_router
from .deps import get_movie_service, get_movies_repository, valid_movie_id

__all__ = ["api_router", "get_movie_service", "get_movies_repository", "valid_movie_id"]
