"""
Movie Service - Business logic for movie operations
"""

import asyncio
from typing import Any, List, Mapping, Sequence, Tuple
from uuid import UUID

from pydantic import ValidationError

from moviepin.core.logging import get_logger
from moviepin.models import AddMoviesResponse, MovieReviewSchema, MovieSchema

from .partial_update import merge_partial_movie
from .repository import MoviesRepository

logger = get_logger(__name__)


class RatingProjectionError(Exception):
    """Raised when a computed movie rating does not pass validation"""

    def __init__(self, movie_id: UUID, errors: str):
        self.movie_id = movie_id
        super().__init__(f"invalid rating projection for movie {movie_id}: {errors}")


class MovieService:
    """Service for movie business logic"""

    def __init__(self, repository: MoviesRepository):
        self.repository = repository

    async def list_movies(self) -> List[MovieSchema]:
        return await self.repository.list_movies()

    async def get_movie(self, movie_id: UUID) -> MovieSchema:
        return await self.repository.get_movie(movie_id)

    async def get_movie_rating(self, movie_id: UUID) -> MovieReviewSchema:
        """Get a movie along with the average rating of its reviews"""

        # Not found is reported before the aggregate is computed
        await self.repository.get_movie(movie_id)
        review = await self.repository.get_movie_rating(movie_id)

        try:
            return MovieReviewSchema.model_validate(review.model_dump())
        except ValidationError as e:
            raise RatingProjectionError(movie_id, str(e)) from e

    async def add_movies(self, movies: Sequence[MovieSchema]) -> AddMoviesResponse:
        """
        Add every movie concurrently, each in its own unit of work.

        One failing movie does not affect the others; the response lists
        which movies were added and which failed.
        """
        outcomes = await asyncio.gather(*(self._add_movie(movie) for movie in movies))

        response = AddMoviesResponse()
        for movie, added in outcomes:
            if added:
                response.added_movies.append(movie)
            else:
                response.failed_movies.append(movie)

        logger.info(
            "Added movies",
            added=len(response.added_movies),
            failed=len(response.failed_movies),
        )
        return response

    async def _add_movie(self, movie: MovieSchema) -> Tuple[MovieSchema, bool]:
        try:
            await self.repository.add_movie(movie)
        except Exception as e:
            logger.error("Failed to add movie", movie_id=str(movie.id), error=str(e))
            return movie, False
        return movie, True

    async def update_movie(self, movie_id: UUID, movie: MovieSchema) -> None:
        await self.repository.update_movie(movie_id, movie)

    async def patch_movie(self, movie_id: UUID, payload: Mapping[str, Any]) -> MovieSchema:
        """Apply a partial update, nothing is stored unless the whole merge is valid"""

        existing = await self.repository.get_movie(movie_id)
        merged = merge_partial_movie(existing, payload)
        await self.repository.update_movie(movie_id, merged)
        return merged

    async def delete_movie(self, movie_id: UUID) -> None:
        await self.repository.delete_movie(movie_id)

    async def replace_movies(self, movies: Sequence[MovieSchema]) -> None:
        await self.repository.replace_movies(movies)
