"""Table definitions, one ``MetaData`` per store.

The stores never share a database, so each table set is created and
dropped independently. Column names are the ones the stores already use.
"""

from __future__ import annotations

from sqlalchemy import Column, Date, Index, Integer, MetaData, String, Table, Text

author_metadata = MetaData()
book_metadata = MetaData()
review_metadata = MetaData()

authors = Table(
    "authors",
    author_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("firstname", Text, nullable=False),
    Column("lastname", Text, nullable=False),
    Column("birthdate", Date),
    Column("deathdate", Date),
    Column("favoritecolor", Text),
    Column("bio", Text),
    Column("nationality", Text),
    Column("datecreated", Date),
)

books = Table(
    "books",
    book_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("author_id", Integer, nullable=False),
    Column("title", String(255), nullable=False),
    Column("synopsis", Text),
    Column("isbn", String(32)),
    Column("publicationdate", Date),
    Index("ix_books_author_id", "author_id"),
)

reviews = Table(
    "reviews",
    review_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("book_id", Integer, nullable=False),
    Column("reviewername", Text, nullable=False),
    Column("rating", Integer, nullable=False),
    Column("comment", Text, nullable=False),
    Index("ix_reviews_book_id", "book_id"),
)

# Column order the row mappers expect.
AUTHOR_COLUMNS = (
    authors.c.id,
    authors.c.firstname,
    authors.c.lastname,
    authors.c.birthdate,
    authors.c.deathdate,
    authors.c.favoritecolor,
    authors.c.bio,
    authors.c.nationality,
    authors.c.datecreated,
)
BOOK_COLUMNS = (
    books.c.id,
    books.c.author_id,
    books.c.title,
    books.c.synopsis,
    books.c.isbn,
    books.c.publicationdate,
)
REVIEW_COLUMNS = (
    reviews.c.id,
    reviews.c.book_id,
    reviews.c.reviewername,
    reviews.c.rating,
    reviews.c.comment,
)
