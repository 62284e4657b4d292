"""
Movie Database Model
"""

from sqlalchemy import Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid, primary_key=True)

    title = Column(String(500), nullable=False, index=True)
    release_date = Column(DateTime(timezone=True), nullable=False)
    genre = Column(String(100), nullable=False)
    director = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Relationships
    reviews = relationship(
        "Review",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Movie(id='{self.id}', title='{self.title}')>"
