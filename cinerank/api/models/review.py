"""
Pydantic schemas for Review API.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Request body for creating a review. The author comes from the session."""

    movie_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5, strict=True)
    title: str = Field("", max_length=200)
    content: str = ""


class ReviewResponse(BaseModel):
    """Response model for review."""

    id: int
    movie_id: int
    user_id: int
    rating: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    username: str | None = None
    movie_title: str | None = None

    class Config:
        from_attributes = True
