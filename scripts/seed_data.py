"""
Seed database with sample data for development
"""
import asyncio
import uuid
from datetime import datetime, timezone

from moviepin.core.config import get_settings
from moviepin.core.database import init_database
from moviepin.models.database.movie import Movie
from moviepin.models.database.review import Review


async def seed_data():
    """Add sample movies and reviews to the database"""
    database = await init_database(get_settings())

    shawshank = Movie(
        id=uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8"),
        title="The Shawshank Redemption",
        release_date=datetime(1994, 9, 23, tzinfo=timezone.utc),
        genre="Drama",
        director="Frank Darabont",
        description="Two imprisoned men bond over a number of years...",
    )
    godfather = Movie(
        id=uuid.UUID("550e8400-e29b-41d4-a716-446655440000"),
        title="The Godfather",
        release_date=datetime(1972, 3, 24, tzinfo=timezone.utc),
        genre="Crime",
        director="Francis Ford Coppola",
        description="The aging patriarch of an organized crime dynasty...",
    )

    reviewer = uuid.uuid4()
    reviews = [
        Review(id=uuid.uuid4(), user_id=reviewer, movie_id=shawshank.id, rating=7.0, review_text="Hope is a good thing."),
        Review(id=uuid.uuid4(), user_id=uuid.uuid4(), movie_id=shawshank.id, rating=8.0, review_text="Still holds up."),
        Review(id=uuid.uuid4(), user_id=reviewer, movie_id=godfather.id, rating=10.0, review_text="An offer I could not refuse."),
    ]

    try:
        async with database.session() as session:
            session.add_all([shawshank, godfather])
            await session.flush()
            session.add_all(reviews)
            await session.commit()
    finally:
        await database.dispose()

    print("✅ Sample data added successfully!")


if __name__ == "__main__":
    asyncio.run(seed_data())
