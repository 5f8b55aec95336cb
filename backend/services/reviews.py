# backend/services/reviews.py
import logging
import math
import re
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from errors import ValidationError, NotFoundError
from models.review import Review

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Anonymous"
DEFAULT_RATING = 5

# Ratings are stored in a 64-bit INTEGER column
MIN_RATING = -2 ** 63
MAX_RATING = 2 ** 63 - 1

# Plain ASCII decimal, optional sign and fraction
NUMERIC_RATING = re.compile(r"([+-]?[0-9]+)(?:\.[0-9]+)?")

# Fields a partial update may touch
UPDATABLE_FIELDS = ("platform", "author", "rating", "text", "date")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _int_in_range(number, default):
    return number if MIN_RATING <= number <= MAX_RATING else default


def parse_rating(value, default: Optional[int] = DEFAULT_RATING) -> Optional[int]:
    """Turn a loosely typed rating into an int.

    Integers and plain decimal strings are accepted, fractions are truncated.
    Missing, boolean, non-numeric and out of range (64-bit) values give
    ``default``. No rating scale is enforced.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return _int_in_range(value, default)
    if isinstance(value, float):
        return _int_in_range(int(value), default) if math.isfinite(value) else default
    if isinstance(value, str):
        match = NUMERIC_RATING.fullmatch(value.strip())
        if match is None:
            return default
        return _int_in_range(int(match.group(1)), default)
    return default


def parse_date(value) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime, normalised to naive UTC. Empty gives None."""
    if value is None or value == "":
        return None
    try:
        if isinstance(value, datetime):
            parsed = value
        else:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError):
        raise ValidationError("Invalid date.")
    return parsed


class ReviewRepository:
    """Review records with owner-or-public visibility.

    A review with ``user_id`` set is visible to that user only. Reviews without
    an owner (demo data, or reviews whose owner was deleted) are visible to
    every authenticated caller. Every operation is a single-record read or
    write.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _visible_to(user_id: int):
        return or_(Review.user_id == user_id, Review.user_id.is_(None))

    def create(self, user_id: int, fields: dict) -> Review:
        platform = fields.get("platform")
        text = fields.get("text")
        if not platform or not text:
            raise ValidationError("Platform and text are required.")

        review = Review(
            platform=platform,
            author=fields.get("author") or DEFAULT_AUTHOR,
            rating=parse_rating(fields.get("rating")),
            text=text,
            date=parse_date(fields.get("date")) or utcnow(),
            user_id=user_id,
        )
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)

        logger.info("Review %s created by user %s", review.id, user_id)
        return review

    def list(self, user_id: int) -> List[Review]:
        return (
            self.db.query(Review)
            .filter(self._visible_to(user_id))
            .order_by(Review.date.desc(), Review.id.desc())
            .all()
        )

    def get_visible(self, review_id: int, user_id: int) -> Review:
        review = (
            self.db.query(Review)
            .filter(Review.id == review_id, self._visible_to(user_id))
            .first()
        )
        if review is None:
            raise NotFoundError("Review not found")
        return review

    def update(self, review_id: int, user_id: int, partial: dict) -> Review:
        """Apply the truthy fields of ``partial``; empty values leave the stored value alone."""
        review = self.get_visible(review_id, user_id)

        changes = {}
        for field in UPDATABLE_FIELDS:
            value = partial.get(field)
            if not value:
                continue
            if field == "rating":
                value = parse_rating(value, default=None)
                if value is None:
                    continue
            elif field == "date":
                value = parse_date(value)
            changes[field] = value

        for field, value in changes.items():
            setattr(review, field, value)
        self.db.commit()
        self.db.refresh(review)

        logger.info("Review %s updated by user %s: %s", review.id, user_id, sorted(changes))
        return review

    def delete(self, review_id: int, user_id: int) -> None:
        review = self.get_visible(review_id, user_id)
        self.db.delete(review)
        self.db.commit()
        logger.info("Review %s deleted by user %s", review_id, user_id)

    def set_suggested_response(self, review_id: int, user_id: int, reply: str) -> Review:
        review = self.get_visible(review_id, user_id)
        review.last_suggested_response = reply
        self.db.commit()
        self.db.refresh(review)
        return review

    def set_response(self, review_id: int, user_id: int, response: Optional[str]) -> Review:
        review = self.get_visible(review_id, user_id)
        review.response = response
        self.db.commit()
        self.db.refresh(review)
        return review
