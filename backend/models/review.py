# backend/models/review.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database import Base

# Model Review
# A customer review collected from an external platform (Google, Yelp, ...).
# Reviews without an owner are demo records visible to every signed-in user.
class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    platform = Column(String, nullable=False)
    author = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    # Reply workflow slots
    response = Column(Text, nullable=True)
    last_suggested_response = Column(Text, nullable=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    user = relationship("User", back_populates="reviews")
