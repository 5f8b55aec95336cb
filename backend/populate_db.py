# backend/populate_db.py
import logging
from datetime import datetime

from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.review import Review

logger = logging.getLogger(__name__)

# Ownerless demo reviews, visible to every signed-in user
DEMO_REVIEWS = [
    {
        "platform": "Google",
        "author": "John D.",
        "rating": 2,
        "text": "Food was okay but the service was really slow.",
        "date": datetime(2025, 12, 5),
    },
    {
        "platform": "Yelp",
        "author": "Sarah K.",
        "rating": 5,
        "text": "Amazing experience! Great staff and delicious food.",
        "date": datetime(2025, 12, 4),
    },
    {
        "platform": "Facebook",
        "author": "Mike R.",
        "rating": 3,
        "text": "Decent place, but the music was too loud for me.",
        "date": datetime(2025, 12, 3),
    },
]


def seed_if_empty(db: Session) -> int:
    """Insert the demo reviews when the review table is empty. Returns the number inserted."""
    if db.query(Review).count() > 0:
        return 0

    db.add_all([Review(user_id=None, **data) for data in DEMO_REVIEWS])
    db.commit()
    logger.info("Seeded %d demo reviews into the database.", len(DEMO_REVIEWS))
    return len(DEMO_REVIEWS)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    init_db()
    session = SessionLocal()
    try:
        seed_if_empty(session)
    finally:
        session.close()
