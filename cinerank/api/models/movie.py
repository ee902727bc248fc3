"""
Pydantic schemas for Movie API.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class MovieCreate(BaseModel):
    """Request body for creating a movie."""

    title: str = Field(..., min_length=1, max_length=500)
    director: str = Field("", max_length=200)
    year: int = Field(..., ge=1800, le=3000)
    plot: str = ""
    poster_url: str = ""
    imdb_rating: float = Field(0.0, ge=0.0, le=10.0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        """Blank titles fail the length check."""
        return value.strip() if isinstance(value, str) else value


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    id: int
    title: str
    director: str
    year: int
    plot: str
    poster_url: str
    imdb_rating: float
    created_at: datetime
    updated_at: datetime
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def tag_names(cls, value):
        """Accept Tag rows or plain names."""
        return sorted(getattr(tag, "name", tag) for tag in value or [])

    class Config:
        from_attributes = True


class MovieWithStatsResponse(MovieResponse):
    """Movie plus review statistics."""

    review_count: int
    average_rating: float

    @classmethod
    def from_stats(cls, item) -> "MovieWithStatsResponse":
        """Build from a crud.MovieWithStats."""
        movie = MovieResponse.model_validate(item.movie)
        return cls(
            **movie.model_dump(),
            review_count=item.review_count,
            average_rating=item.average_rating,
        )
