# backend/schemas/review.py
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base configuration: camelCase on the wire, ORM compatible
class CamelBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)


# Schema for creating a review
class ReviewCreate(CamelBase):
    """rating and date stay loosely typed, the repository parses them."""
    platform: Optional[str] = None
    author: Optional[str] = None
    rating: Optional[Any] = None
    text: Optional[str] = None
    date: Optional[str] = None


# Schema for PUT requests - all fields optional, only truthy values are applied
class ReviewUpdate(CamelBase):
    platform: Optional[str] = None
    author: Optional[str] = None
    rating: Optional[Any] = None
    text: Optional[str] = None
    date: Optional[str] = None


# Full review representation
class ReviewOut(CamelBase):
    id: int
    platform: str
    author: str
    rating: int
    text: str
    date: datetime
    response: Optional[str] = None
    last_suggested_response: Optional[str] = None
    user_id: Optional[int] = None


class GenerateReplyRequest(CamelBase):
    review_id: int
    business_name: str = ""


class GenerateReplyResponse(BaseModel):
    reply: str


class SaveReplyRequest(CamelBase):
    review_id: int
    response: Optional[str] = None


class SaveReplyResponse(BaseModel):
    success: bool = True
    review: ReviewOut


class SuccessResponse(BaseModel):
    success: bool = True
