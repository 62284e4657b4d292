"""
Movies Repository - Persistence of movie records
"""

from abc import ABC, abstractmethod
from datetime import timezone
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update

from moviepin.core.database import Database
from moviepin.core.logging import get_logger
from moviepin.models import Movie, MovieReviewSchema, MovieSchema, Review

from .bulk_replace import BulkReplace

logger = get_logger(__name__)


class MovieNotFoundError(Exception):
    """Raised when no movie matches the requested identifier"""

    def __init__(self, movie_id: UUID):
        self.movie_id = movie_id
        super().__init__(f"movie {movie_id} does not exist")


def compute_rating(average: Optional[float]) -> Optional[float]:
    """
    Convert the average raw review score (0-10) to the exposed 0-5 rating.

    The average is rounded to the nearest integer *before* halving and the
    result is truncated to one decimal place, so an average of 7.4 gives
    3.5 and not 3.7. Halves round away from zero, so 6.5 gives 3.5.
    """
    if average is None:
        return None
    rounded = Decimal(str(average)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float((rounded / 2).quantize(Decimal("0.1"), rounding=ROUND_DOWN))


class MoviesRepository(ABC):
    """Storage contract used by the movie service"""

    @abstractmethod
    async def list_movies(self) -> List[MovieSchema]:
        ...

    @abstractmethod
    async def get_movie(self, movie_id: UUID) -> MovieSchema:
        """Raises MovieNotFoundError when absent"""

    @abstractmethod
    async def add_movie(self, movie: MovieSchema) -> None:
        ...

    @abstractmethod
    async def update_movie(self, movie_id: UUID, movie: MovieSchema) -> None:
        """Raises MovieNotFoundError when absent"""

    @abstractmethod
    async def delete_movie(self, movie_id: UUID) -> None:
        """Raises MovieNotFoundError when absent"""

    @abstractmethod
    async def replace_movies(self, movies: Sequence[MovieSchema]) -> None:
        """Replace the whole collection, all or nothing"""

    @abstractmethod
    async def get_movie_rating(self, movie_id: UUID) -> MovieReviewSchema:
        """Raises MovieNotFoundError when absent"""


def _to_schema(movie: Movie) -> MovieSchema:
    # Timestamps read back without a zone (SQLite) are treated as UTC by the schema
    return MovieSchema.model_validate(movie)


def _columns(movie: MovieSchema) -> dict:
    values = movie.model_dump()
    values["release_date"] = movie.release_date.astimezone(timezone.utc)
    return values


class SQLAlchemyMoviesRepository(MoviesRepository):
    """Movies repository backed by SQLAlchemy async sessions"""

    def __init__(self, database: Database):
        self.database = database
        self.bulk_replace = BulkReplace(database.session_factory)

    async def list_movies(self) -> List[MovieSchema]:
        async with self.database.session() as db:
            result = await db.execute(select(Movie))
            return [_to_schema(movie) for movie in result.scalars().all()]

    async def get_movie(self, movie_id: UUID) -> MovieSchema:
        async with self.database.session() as db:
            result = await db.execute(select(Movie).where(Movie.id == movie_id))
            movie = result.scalar_one_or_none()

        if movie is None:
            raise MovieNotFoundError(movie_id)
        return _to_schema(movie)

    async def add_movie(self, movie: MovieSchema) -> None:
        async with self.database.session() as db:
            db.add(Movie(**_columns(movie)))
            await db.commit()

        logger.info("Added movie", movie_id=str(movie.id), title=movie.title)

    async def update_movie(self, movie_id: UUID, movie: MovieSchema) -> None:
        async with self.database.session() as db:
            result = await db.execute(
                update(Movie).where(Movie.id == movie_id).values(**_columns(movie))
            )
            await db.commit()

        if result.rowcount == 0:
            raise MovieNotFoundError(movie_id)

        logger.info("Updated movie", movie_id=str(movie_id), title=movie.title)

    async def delete_movie(self, movie_id: UUID) -> None:
        async with self.database.session() as db:
            result = await db.execute(delete(Movie).where(Movie.id == movie_id))
            await db.commit()

        if result.rowcount == 0:
            raise MovieNotFoundError(movie_id)

        logger.info("Deleted movie", movie_id=str(movie_id))

    async def replace_movies(self, movies: Sequence[MovieSchema]) -> None:
        await self.bulk_replace.run([_columns(movie) for movie in movies])

    async def get_movie_rating(self, movie_id: UUID) -> MovieReviewSchema:
        async with self.database.session() as db:
            result = await db.execute(select(Movie).where(Movie.id == movie_id))
            movie = result.scalar_one_or_none()
            average = None
            if movie is not None:
                average = await db.scalar(
                    select(func.avg(Review.rating)).where(Review.movie_id == movie_id)
                )

        if movie is None:
            raise MovieNotFoundError(movie_id)

        fields = _to_schema(movie).model_dump()
        # Left unvalidated, the service checks the projection before use
        return MovieReviewSchema.model_construct(
            **fields,
            rating=compute_rating(float(average) if average is not None else None),
        )
