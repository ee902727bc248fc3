"""
SQLAlchemy ORM models for the CineRank database.

This module defines the User, Movie, Tag and Review tables and the movie_tags
association table. Deleting a movie or a user cascades to its reviews.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import (
    Column, Integer, String, Float, Text, ForeignKey, Table,
    CheckConstraint, Index, TIMESTAMP
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
from sqlalchemy.sql import func


ROLE_USER = 'user'
ROLE_ADMIN = 'admin'
ROLES = (ROLE_USER, ROLE_ADMIN)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# Composite primary key makes linking a tag twice a no-op
movie_tags = Table(
    'movie_tags',
    Base.metadata,
    Column('movie_id', Integer, ForeignKey('movies.id', ondelete='CASCADE'), primary_key=True),
    Column('tag_id', Integer, ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class User(Base):
    """
    User account.

    Attributes:
        id: Primary key, auto-incremented
        username: Display name
        email: Login identifier (unique)
        password_hash: bcrypt hash, never returned by the API
        role: 'user' or 'admin', fixed at creation
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """
    __tablename__ = 'users'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(10), nullable=False, default=ROLE_USER)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name='check_role'),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"


class Tag(Base):
    """Free-text label shared between movies. Names are case-sensitive."""
    __tablename__ = 'tags'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    movies: Mapped[List["Movie"]] = relationship(
        "Movie",
        secondary=movie_tags,
        back_populates="tags"
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class Movie(Base):
    """
    Movie catalogue entry.

    Attributes:
        id: Primary key, auto-incremented
        title: Movie title (required)
        director: Director name
        year: Release year
        plot: Plot summary
        poster_url: URL of a poster image
        imdb_rating: IMDB score (0 when unknown)
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """
    __tablename__ = 'movies'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    director: Mapped[str] = mapped_column(Text, nullable=False, default='')
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    plot: Mapped[str] = mapped_column(Text, nullable=False, default='')
    poster_url: Mapped[str] = mapped_column(Text, nullable=False, default='')
    imdb_rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    tags: Mapped[List["Tag"]] = relationship(
        "Tag",
        secondary=movie_tags,
        back_populates="movies"
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="movie",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_movies_title', 'title'),
        Index('idx_movies_created', 'created_at'),
    )

    @property
    def tag_names(self) -> List[str]:
        """Tag names in alphabetical order."""
        return sorted(tag.name for tag in self.tags)

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, title='{self.title}', year={self.year})>"


class Review(Base):
    """
    A user's review of a movie.

    Attributes:
        id: Primary key, auto-incremented
        movie_id: Foreign key to movies table
        user_id: Foreign key to users table
        rating: Whole stars, 1 to 5
        title: Review headline
        content: Review body
        created_at: Timestamp when review was created
        updated_at: Timestamp when review was last updated
    """
    __tablename__ = 'reviews'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('movies.id', ondelete='CASCADE'),
        nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False, default='')
    content: Mapped[str] = mapped_column(Text, nullable=False, default='')
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    user: Mapped["User"] = relationship("User", back_populates="reviews")
    movie: Mapped["Movie"] = relationship("Movie", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name='check_rating_range'),
        Index('idx_reviews_movie', 'movie_id'),
        Index('idx_reviews_user', 'user_id'),
        Index('idx_reviews_created', 'created_at'),
    )

    @property
    def username(self) -> Optional[str]:
        return self.user.username if self.user is not None else None

    @property
    def movie_title(self) -> Optional[str]:
        return self.movie.title if self.movie is not None else None

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, movie_id={self.movie_id}, user_id={self.user_id}, rating={self.rating})>"
