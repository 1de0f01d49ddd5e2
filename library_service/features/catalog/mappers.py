"""Row mappers: store rows in, canonical entities out.

Each mapper takes the column set selected by its store adapter
(``AUTHOR_COLUMNS``, ``BOOK_COLUMNS``, ``REVIEW_COLUMNS``), so there is one
input shape per entity whatever the dialect.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from library_service.features.catalog.identifiers import format_id
from library_service.features.catalog.models import Author, Book, Review


def normalize_date(value: Any) -> str | None:
    """Render a store date as ``YYYY-MM-DD``.

    Native dates and datetimes are formatted (aware datetimes in UTC first);
    anything else is stringified and cut to ten characters.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def map_author_row(row: Any) -> Author:
    return Author(
        id=format_id(row.id),
        firstname=row.firstname,
        lastname=row.lastname,
        birthdate=normalize_date(row.birthdate),
        deathdate=normalize_date(row.deathdate),
        favorite_color=row.favoritecolor,
        bio=row.bio,
        nationality=row.nationality,
        date_created=normalize_date(row.datecreated),
    )


def map_book_row(row: Any) -> Book:
    return Book(
        id=format_id(row.id),
        author_id=format_id(row.author_id),
        title=row.title,
        synopsis=row.synopsis,
        isbn=row.isbn,
        publication_date=normalize_date(row.publicationdate),
    )


def map_review_row(row: Any) -> Review:
    return Review(
        id=format_id(row.id),
        book_id=format_id(row.book_id),
        reviewer_name=row.reviewername,
        rating=int(row.rating),
        comment=row.comment,
    )
