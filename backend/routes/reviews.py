# backend/routes/reviews.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas import review as schemas
from services.replies import build_reply
from services.reviews import ReviewRepository
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user_id

router = APIRouter(prefix="/api", tags=["Reviews"])


# Create a review owned by the caller
@router.post("/reviews", response_model=schemas.ReviewOut)
def create_review(
    payload: schemas.ReviewCreate,
    request: Request,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    review = ReviewRepository(db).create(user_id, payload.model_dump())
    write_log(db, user_id=user_id, action="REVIEW_CREATE", resource="reviews",
              ip=client_ip(request), meta={"review_id": review.id})
    return review


# List the caller's reviews plus ownerless demo reviews, newest first
@router.get("/reviews", response_model=List[schemas.ReviewOut])
def list_reviews(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return ReviewRepository(db).list(user_id)


@router.put("/reviews/{review_id}", response_model=schemas.ReviewOut)
def update_review(
    review_id: int,
    payload: schemas.ReviewUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    review = ReviewRepository(db).update(review_id, user_id, payload.model_dump(exclude_unset=True))
    write_log(db, user_id=user_id, action="REVIEW_UPDATE", resource="reviews",
              ip=client_ip(request), meta={"review_id": review.id})
    return review


@router.delete("/reviews/{review_id}", response_model=schemas.SuccessResponse)
def delete_review(
    review_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ReviewRepository(db).delete(review_id, user_id)
    write_log(db, user_id=user_id, action="REVIEW_DELETE", resource="reviews",
              ip=client_ip(request), meta={"review_id": review_id})
    return {"success": True}


# Build a suggested reply and remember it on the review
@router.post("/generate-reply", response_model=schemas.GenerateReplyResponse)
def generate_reply(
    payload: schemas.GenerateReplyRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    repo = ReviewRepository(db)
    review = repo.get_visible(payload.review_id, user_id)
    reply = build_reply(review.author, review.rating, payload.business_name)
    repo.set_suggested_response(review.id, user_id, reply)
    return {"reply": reply}


# Save the reply the user picked
@router.post("/save-reply", response_model=schemas.SaveReplyResponse)
def save_reply(
    payload: schemas.SaveReplyRequest,
    request: Request,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    review = ReviewRepository(db).set_response(payload.review_id, user_id, payload.response)
    write_log(db, user_id=user_id, action="REPLY_SAVE", resource="reviews",
              ip=client_ip(request), meta={"review_id": review.id})
    return {"success": True, "review": review}
