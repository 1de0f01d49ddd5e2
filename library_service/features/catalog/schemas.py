"""Pydantic schemas validating mutation input before any store is touched.

Ids are parsed separately by :mod:`identifiers`; these models only cover the
free-form fields.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from library_service.core.exceptions import ValidationException


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _iso_date(value: object) -> object:
    # Dates arrive as YYYY-MM-DD; a longer ISO timestamp keeps its date part.
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return value[:10]
    return value


RequiredText = Annotated[str, BeforeValidator(_strip), Field(min_length=1)]
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[date | None, BeforeValidator(_iso_date)]


class _InputModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AuthorCreate(_InputModel):
    """Fields for a new author. ``date_created`` defaults to today."""

    firstname: RequiredText
    lastname: RequiredText
    birthdate: OptionalDate = None
    deathdate: OptionalDate = None
    favorite_color: OptionalText = None
    bio: OptionalText = None
    nationality: OptionalText = None
    date_created: OptionalDate = None

    def to_row(self, today: date) -> dict[str, object]:
        return {
            "firstname": self.firstname,
            "lastname": self.lastname,
            "birthdate": self.birthdate,
            "deathdate": self.deathdate,
            "favoritecolor": self.favorite_color,
            "bio": self.bio,
            "nationality": self.nationality,
            "datecreated": self.date_created or today,
        }


class BookCreate(_InputModel):
    title: Annotated[str, BeforeValidator(_strip), Field(min_length=1, max_length=255)]
    synopsis: OptionalText = None
    isbn: Annotated[
        Annotated[str, Field(max_length=32)] | None,
        BeforeValidator(_blank_to_none),
    ] = None
    publication_date: OptionalDate = None

    def to_row(self, author_id: int, book_id: int | None = None) -> dict[str, object]:
        row: dict[str, object] = {
            "author_id": author_id,
            "title": self.title,
            "synopsis": self.synopsis,
            "isbn": self.isbn,
            "publicationdate": self.publication_date,
        }
        if book_id is not None:
            row["id"] = book_id
        return row


class ReviewCreate(_InputModel):
    reviewer_name: RequiredText
    rating: int = Field(..., strict=True, ge=1, le=5)
    comment: RequiredText

    def to_row(self, book_id: int) -> dict[str, object]:
        return {
            "book_id": book_id,
            "reviewername": self.reviewer_name,
            "rating": self.rating,
            "comment": self.comment,
        }


_FIELD_NAMES = {
    "favorite_color": "favoriteColor",
    "date_created": "dateCreated",
    "publication_date": "publicationDate",
    "reviewer_name": "reviewerName",
}


def validation_exception_from(error: ValidationError) -> ValidationException:
    """Turn the first pydantic error into a :class:`ValidationException`.

    The ``field`` extra uses the public (camelCase) field name.
    """
    first = error.errors()[0]
    loc = str(first["loc"][0]) if first["loc"] else None
    field = _FIELD_NAMES.get(loc, loc) if loc else None
    message = first["msg"]
    detail = f"{field}: {message}" if field else message
    return ValidationException(detail=detail, extra={"field": field})
