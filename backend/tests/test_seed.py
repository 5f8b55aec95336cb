from models.review import Review
from populate_db import DEMO_REVIEWS, seed_if_empty


def test_seed_inserts_ownerless_demo_reviews(db):
    assert seed_if_empty(db) == len(DEMO_REVIEWS)

    reviews = db.query(Review).all()
    assert len(reviews) == 3
    assert all(r.user_id is None for r in reviews)


def test_seed_skips_non_empty_table(db):
    seed_if_empty(db)
    assert seed_if_empty(db) == 0
    assert db.query(Review).count() == 3
