"""Canonical entity shapes returned by the row mappers.

Ids are strings and dates are ``YYYY-MM-DD`` strings regardless of what the
owning store hands back.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Author:
    id: str
    firstname: str
    lastname: str
    birthdate: str | None = None
    deathdate: str | None = None
    favorite_color: str | None = None
    bio: str | None = None
    nationality: str | None = None
    date_created: str | None = None


@dataclass(frozen=True, slots=True)
class Book:
    id: str
    author_id: str
    title: str
    synopsis: str | None = None
    isbn: str | None = None
    publication_date: str | None = None


@dataclass(frozen=True, slots=True)
class Review:
    id: str
    book_id: str
    reviewer_name: str
    rating: int
    comment: str
