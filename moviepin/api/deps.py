"""
API Dependencies
"""

import re
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status

from moviepin.core.logging import get_logger
from moviepin.services.data import MovieService, MoviesRepository

logger = get_logger(__name__)

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

# ==========================================
# REPOSITORY DEPENDENCIES
# ==========================================

def get_movies_repository(request: Request) -> MoviesRepository:
    """Repository created at startup and stored on the application"""
    repository = request.app.state.movies_repository
    if repository is None:
        raise RuntimeError("Movies repository not initialized")
    return repository


def get_movie_service(
    repository: MoviesRepository = Depends(get_movies_repository),
) -> MovieService:
    return MovieService(repository)

# ==========================================
# VALIDATION DEPENDENCIES
# ==========================================

async def valid_movie_id(movie_id: str) -> UUID:
    """Validate the movie id path segment"""

    if not _UUID_RE.match(movie_id):
        logger.info("Rejected invalid movie id", movie_id=movie_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid movie id. Expected a UUID such as 6ba7b810-9dad-11d1-80b4-00c04fd430c8",
        )

    return UUID(movie_id)
