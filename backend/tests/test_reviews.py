"""
Review repository tests.
"""

from datetime import datetime

import pytest

from errors import NotFoundError, ValidationError
from models.review import Review
from models.users import User
from services.reviews import ReviewRepository, parse_date, parse_rating, utcnow


@pytest.fixture
def repo(db):
    return ReviewRepository(db)


@pytest.fixture
def owner(db):
    user = User(email="owner@x.com", password_hash="x")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def other(db):
    user = User(email="other@x.com", password_hash="x")
    db.add(user)
    db.commit()
    return user


def _demo(db, **fields):
    data = {"platform": "Yelp", "author": "Sarah K.", "rating": 4, "text": "nice", "date": datetime(2025, 12, 4)}
    data.update(fields)
    review = Review(user_id=None, **data)
    db.add(review)
    db.commit()
    return review


# --- parsing helpers ---

@pytest.mark.parametrize(
    "value,expected",
    [(None, 5), ("abc", 5), ("", 5), (True, 5), ([], 5), (3, 3), ("4", 4), (" 2 ", 2), (4.9, 4), ("3.5", 3), (0, 0), (-2, -2), (11, 11)],
)
def test_parse_rating(value, expected):
    assert parse_rating(value) == expected


def test_parse_rating_custom_default():
    assert parse_rating("abc", default=None) is None
    assert parse_rating(float("nan"), default=None) is None


def test_parse_date():
    assert parse_date(None) is None
    assert parse_date("") is None
    assert parse_date("2025-12-05") == datetime(2025, 12, 5)
    assert parse_date("2025-12-05T10:00:00Z") == datetime(2025, 12, 5, 10, 0)
    assert parse_date("2025-12-05T12:00:00+02:00") == datetime(2025, 12, 5, 10, 0)


def test_parse_date_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_date("yesterday-ish")


def test_parse_date_rejects_out_of_range_offset():
    with pytest.raises(ValidationError):
        parse_date("9999-12-31T23:00:00-05:00")


@pytest.mark.parametrize("value", ["1_000", "\u0661\u0662", "1e3", "0x10", "+-1", "1."])
def test_parse_rating_only_plain_decimals(value):
    assert parse_rating(value) == 5


@pytest.mark.parametrize("value", [10 ** 20, -(10 ** 20), "99999999999999999999", 1e300, 2 ** 63])
def test_parse_rating_outside_64_bit_range(value):
    assert parse_rating(value) == 5
    assert parse_rating(value, default=None) is None


def test_parse_rating_64_bit_bounds():
    assert parse_rating(2 ** 63 - 1) == 2 ** 63 - 1
    assert parse_rating(str(-(2 ** 63))) == -(2 ** 63)


# --- create ---

def test_create_applies_defaults(repo, owner):
    before = utcnow()
    review = repo.create(owner.id, {"platform": "Google", "text": "ok"})

    assert review.author == "Anonymous"
    assert review.rating == 5
    assert review.user_id == owner.id
    assert review.date >= before.replace(microsecond=0)


def test_create_non_numeric_rating_defaults_to_five(repo, owner):
    assert repo.create(owner.id, {"platform": "Google", "text": "ok", "rating": "abc"}).rating == 5


def test_create_keeps_supplied_fields(repo, owner):
    review = repo.create(
        owner.id,
        {"platform": "Yelp", "text": "great", "author": "Jo", "rating": "2", "date": "2025-01-02"},
    )
    assert (review.author, review.rating, review.date) == ("Jo", 2, datetime(2025, 1, 2))


@pytest.mark.parametrize("fields", [{"text": "ok"}, {"platform": "Google"}, {"platform": "", "text": "ok"}, {"platform": "Google", "text": ""}])
def test_create_requires_platform_and_text(repo, owner, db, fields):
    with pytest.raises(ValidationError):
        repo.create(owner.id, fields)
    assert db.query(Review).count() == 0


# --- list ---

def test_list_shows_own_and_ownerless_reviews_only(repo, db, owner, other):
    mine = repo.create(owner.id, {"platform": "Google", "text": "mine"})
    repo.create(other.id, {"platform": "Google", "text": "theirs"})
    demo = _demo(db)

    visible = repo.list(owner.id)

    assert {r.id for r in visible} == {mine.id, demo.id}
    assert all(r.user_id in (owner.id, None) for r in visible)


def test_list_is_ordered_by_date_descending(repo, db, owner):
    _demo(db, text="old", date=datetime(2025, 12, 3))
    _demo(db, text="newest", date=datetime(2025, 12, 5))
    repo.create(owner.id, {"platform": "Google", "text": "middle", "date": "2025-12-04"})

    assert [r.text for r in repo.list(owner.id)] == ["newest", "middle", "old"]


# --- update ---

def test_update_applies_truthy_fields(repo, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok", "author": "Jo"})

    updated = repo.update(review.id, owner.id, {"text": "better", "rating": "3", "date": "2025-06-01"})

    assert updated.text == "better"
    assert updated.rating == 3
    assert updated.date == datetime(2025, 6, 1)
    assert updated.author == "Jo"
    assert updated.platform == "Google"


def test_update_with_empty_author_is_noop(repo, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok", "author": "Jo"})

    updated = repo.update(review.id, owner.id, {"author": ""})

    assert updated.author == "Jo"


def test_update_ignores_falsy_and_non_numeric_rating(repo, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok", "rating": 4})

    assert repo.update(review.id, owner.id, {"rating": 0}).rating == 4
    assert repo.update(review.id, owner.id, {"rating": None}).rating == 4
    assert repo.update(review.id, owner.id, {"rating": "abc"}).rating == 4


def test_update_missing_review(repo, owner):
    with pytest.raises(NotFoundError):
        repo.update(12345, owner.id, {"text": "x"})


def test_update_review_owned_by_someone_else(repo, owner, other):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok"})

    with pytest.raises(NotFoundError):
        repo.update(review.id, other.id, {"text": "hijacked"})
    assert repo.get_visible(review.id, owner.id).text == "ok"


def test_update_ownerless_review_is_allowed(repo, db, owner):
    demo = _demo(db)
    assert repo.update(demo.id, owner.id, {"author": "Edited"}).author == "Edited"


# --- delete ---

def test_delete_twice(repo, db, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok"})

    repo.delete(review.id, owner.id)
    assert db.query(Review).count() == 0

    with pytest.raises(NotFoundError):
        repo.delete(review.id, owner.id)


def test_delete_review_owned_by_someone_else(repo, db, owner, other):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok"})

    with pytest.raises(NotFoundError):
        repo.delete(review.id, other.id)
    assert db.query(Review).count() == 1


# --- ownership lifecycle ---

def test_deleting_owner_orphans_reviews(repo, db, owner, other):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok"})
    review_id = review.id

    db.delete(owner)
    db.commit()
    db.expire_all()

    orphan = db.get(Review, review_id)
    assert orphan is not None
    assert orphan.user_id is None
    assert review_id in {r.id for r in repo.list(other.id)}


# --- reply slots ---

def test_reply_slots(repo, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok"})

    repo.set_suggested_response(review.id, owner.id, "draft")
    saved = repo.set_response(review.id, owner.id, "final")

    assert saved.last_suggested_response == "draft"
    assert saved.response == "final"


# --- out of range input ---

def test_create_with_huge_rating_stores_default(repo, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok", "rating": 10 ** 20})
    assert review.rating == 5


def test_update_with_huge_rating_keeps_stored_value(repo, owner):
    review = repo.create(owner.id, {"platform": "Google", "text": "ok", "rating": 4})
    assert repo.update(review.id, owner.id, {"rating": "99999999999999999999"}).rating == 4


def test_create_with_overflowing_date(repo, owner, db):
    with pytest.raises(ValidationError):
        repo.create(owner.id, {"platform": "Google", "text": "ok", "date": "9999-12-31T23:00:00-05:00"})
    assert db.query(Review).count() == 0
