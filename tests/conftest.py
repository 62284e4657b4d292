"""
Shared fixtures: an in-memory movies repository and an API client
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from moviepin.core.config import Settings
from moviepin.main import create_app
from moviepin.models import MovieReviewSchema, MovieSchema
from moviepin.services.data import MovieNotFoundError, MoviesRepository

MOVIE = MovieSchema(
    id=UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8"),
    title="The Shawshank Redemption",
    release_date=datetime(1994, 9, 23, tzinfo=timezone.utc),
    genre="Drama",
    director="Frank Darabont",
    description="Prisoners",
)

OTHER_MOVIE = MovieSchema(
    id=UUID("550e8400-e29b-41d4-a716-446655440000"),
    title="The Godfather",
    release_date=datetime(1972, 3, 24, tzinfo=timezone.utc),
    genre="Crime",
    director="Francis Ford Coppola",
    description="The aging patriarch of an organized crime dynasty",
)

MISSING_ID = UUID("9f1c2d3e-4b5a-4c6d-8e7f-0a1b2c3d4e5f")


def movie_json(movie: MovieSchema) -> dict:
    return movie.model_dump(mode="json")


class FakeMoviesRepository(MoviesRepository):
    """In-memory repository; ``errors`` maps an operation name to the exception it raises"""

    def __init__(self, movies: Sequence[MovieSchema] = ()):
        self.movies: Dict[UUID, MovieSchema] = {movie.id: movie for movie in movies}
        self.ratings: Dict[UUID, Optional[float]] = {}
        self.errors: Dict[str, Exception] = {}
        self.failing_adds: Dict[UUID, Exception] = {}
        self.calls: List[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.errors:
            raise self.errors[operation]

    async def list_movies(self) -> List[MovieSchema]:
        self._enter("list_movies")
        return list(self.movies.values())

    async def get_movie(self, movie_id: UUID) -> MovieSchema:
        self._enter("get_movie")
        if movie_id not in self.movies:
            raise MovieNotFoundError(movie_id)
        return self.movies[movie_id]

    async def add_movie(self, movie: MovieSchema) -> None:
        self._enter("add_movie")
        if movie.id in self.failing_adds:
            raise self.failing_adds[movie.id]
        if movie.id in self.movies:
            raise ValueError(f"duplicate movie {movie.id}")
        self.movies[movie.id] = movie

    async def update_movie(self, movie_id: UUID, movie: MovieSchema) -> None:
        self._enter("update_movie")
        if movie_id not in self.movies:
            raise MovieNotFoundError(movie_id)
        del self.movies[movie_id]
        self.movies[movie.id] = movie

    async def delete_movie(self, movie_id: UUID) -> None:
        self._enter("delete_movie")
        if movie_id not in self.movies:
            raise MovieNotFoundError(movie_id)
        del self.movies[movie_id]

    async def replace_movies(self, movies: Sequence[MovieSchema]) -> None:
        self._enter("replace_movies")
        replacement = {}
        for movie in movies:
            if movie.id in replacement:
                raise ValueError(f"duplicate movie {movie.id}")
            replacement[movie.id] = movie
        self.movies = replacement

    async def get_movie_rating(self, movie_id: UUID) -> MovieReviewSchema:
        self._enter("get_movie_rating")
        if movie_id not in self.movies:
            raise MovieNotFoundError(movie_id)
        return MovieReviewSchema.model_construct(
            **self.movies[movie_id].model_dump(),
            rating=self.ratings.get(movie_id),
        )


@pytest.fixture
def settings():
    return Settings(LOG_FORMAT="simple", LOG_LEVEL="WARNING")


@pytest.fixture
def repository():
    return FakeMoviesRepository([MOVIE])


@pytest.fixture
def client(settings, repository):
    app = create_app(settings, repository=repository)
    with TestClient(app) as test_client:
        yield test_client
