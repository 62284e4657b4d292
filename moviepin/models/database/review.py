"""
Review Database Model
"""

from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class Review(Base, TimestampMixin):
    __tablename__ = "reviews"

    id = Column(Uuid, primary_key=True)
    user_id = Column(Uuid, nullable=False, index=True)
    movie_id = Column(
        Uuid,
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Raw reviewer score on a 0-10 scale
    rating = Column(Float, nullable=False)
    review_text = Column(String(500), nullable=False)

    movie = relationship("Movie", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name="ck_reviews_rating_range"),
    )

    def __repr__(self):
        return f"<Review(id='{self.id}', movie_id='{self.movie_id}', rating={self.rating})>"
