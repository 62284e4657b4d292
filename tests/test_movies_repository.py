"""
SQLAlchemy repository against a throwaway SQLite database
"""

import uuid

import pytest
from sqlalchemy import select

from moviepin.core.config import Settings
from moviepin.core.database import Database, init_database
from moviepin.models import Review, ReviewSchema
from moviepin.services.data import (
    MovieNotFoundError,
    ReplaceMoviesError,
    SQLAlchemyMoviesRepository,
    compute_rating,
)

from .conftest import MISSING_ID, MOVIE, OTHER_MOVIE

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def database(tmp_path):
    settings = Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'movies.db'}",
        LOG_FORMAT="simple",
    )
    database = await init_database(settings)
    yield database
    await database.drop_tables()
    await database.dispose()


@pytest.fixture
async def repository(database):
    repository = SQLAlchemyMoviesRepository(database)
    await repository.add_movie(MOVIE)
    return repository


async def add_reviews(database: Database, movie_id, *ratings):
    async with database.session() as db:
        for rating in ratings:
            db.add(Review(id=uuid.uuid4(), user_id=uuid.uuid4(), movie_id=movie_id,
                          rating=rating, review_text="Seen it"))
        await db.commit()


# ==========================================
# READ AND WRITE
# ==========================================

async def test_get_movie(repository):
    movie = await repository.get_movie(MOVIE.id)

    assert movie == MOVIE
    assert movie.release_date.tzinfo is not None


async def test_get_movie_not_found(repository):
    with pytest.raises(MovieNotFoundError):
        await repository.get_movie(MISSING_ID)


async def test_list_movies(repository):
    await repository.add_movie(OTHER_MOVIE)

    movies = await repository.list_movies()

    assert sorted(movies, key=lambda m: m.title) == [OTHER_MOVIE, MOVIE]


async def test_add_duplicate_movie_fails(repository):
    with pytest.raises(Exception):
        await repository.add_movie(MOVIE)

    assert await repository.list_movies() == [MOVIE]


async def test_update_movie(repository):
    changed = MOVIE.model_copy(update={"director": "F. Darabont"})

    await repository.update_movie(MOVIE.id, changed)

    assert (await repository.get_movie(MOVIE.id)).director == "F. Darabont"


async def test_update_movie_not_found(repository):
    with pytest.raises(MovieNotFoundError):
        await repository.update_movie(MISSING_ID, OTHER_MOVIE)


async def test_delete_movie(repository):
    await repository.delete_movie(MOVIE.id)

    assert await repository.list_movies() == []


async def test_delete_movie_not_found(repository):
    with pytest.raises(MovieNotFoundError):
        await repository.delete_movie(MISSING_ID)


async def test_delete_movie_removes_reviews(repository, database):
    await add_reviews(database, MOVIE.id, 8.0)

    await repository.delete_movie(MOVIE.id)
    await repository.add_movie(MOVIE)

    assert (await repository.get_movie_rating(MOVIE.id)).rating is None


# ==========================================
# REPLACE ALL
# ==========================================

async def test_replace_movies(repository):
    await repository.replace_movies([OTHER_MOVIE])

    assert await repository.list_movies() == [OTHER_MOVIE]


async def test_replace_movies_with_nothing(repository):
    await repository.replace_movies([])

    assert await repository.list_movies() == []


async def test_replace_movies_rolls_back_on_failure(repository):
    with pytest.raises(ReplaceMoviesError) as exc_info:
        await repository.replace_movies([OTHER_MOVIE, OTHER_MOVIE])

    assert exc_info.value.failed == 1
    assert await repository.list_movies() == [MOVIE]


async def test_replace_movies_aborts_remaining_inserts(repository):
    third = MOVIE.model_copy(update={"id": MISSING_ID, "title": "The Green Mile"})

    with pytest.raises(ReplaceMoviesError) as exc_info:
        await repository.replace_movies([OTHER_MOVIE, OTHER_MOVIE, third])

    assert exc_info.value.failed + exc_info.value.aborted == 2
    assert await repository.list_movies() == [MOVIE]


# ==========================================
# RATING
# ==========================================

async def test_rating_without_reviews(repository):
    review = await repository.get_movie_rating(MOVIE.id)

    assert review.rating is None
    assert review.title == MOVIE.title


async def test_rating_from_reviews(repository, database):
    # average 7.4 rounds to 7 before halving
    await add_reviews(database, MOVIE.id, 7.0, 7.8)

    review = await repository.get_movie_rating(MOVIE.id)

    assert review.rating == 3.5


async def test_rating_tie_rounds_up(repository, database):
    # 6 and 7 average to 6.5, which rounds to 7
    await add_reviews(database, MOVIE.id, 6.0, 7.0)

    review = await repository.get_movie_rating(MOVIE.id)

    assert review.rating == 3.5


async def test_rating_only_counts_own_reviews(repository, database):
    await repository.add_movie(OTHER_MOVIE)
    await add_reviews(database, MOVIE.id, 10.0)
    await add_reviews(database, OTHER_MOVIE.id, 2.0)

    assert (await repository.get_movie_rating(MOVIE.id)).rating == 5.0
    assert (await repository.get_movie_rating(OTHER_MOVIE.id)).rating == 1.0


async def test_review_row_matches_schema(repository, database):
    await add_reviews(database, MOVIE.id, 9.5)

    async with database.session() as db:
        row = (await db.execute(select(Review))).scalar_one()

    review = ReviewSchema.model_validate(row)
    assert review.movie_id == MOVIE.id
    assert review.rating == 9.5
    assert review.created_at is not None


async def test_rating_not_found(repository):
    with pytest.raises(MovieNotFoundError):
        await repository.get_movie_rating(MISSING_ID)


@pytest.mark.parametrize(
    "average, rating",
    [
        (None, None), (0.0, 0.0), (7.4, 3.5), (7.6, 4.0), (9.6, 5.0), (3.0, 1.5),
        (6.5, 3.5), (0.5, 0.5), (2.5, 1.5),
    ],
)
async def test_compute_rating(average, rating):
    assert compute_rating(average) == rating


async def test_health_check(database):
    health = await database.check_health()

    assert health["status"] == "healthy"
    assert health["checks"]["connectivity"] == "pass"
