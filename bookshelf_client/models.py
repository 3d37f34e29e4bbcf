"""Typed payloads decoded from the bookshelf API.

Field names follow the snake_case wire format.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)


class Session(_Payload):
    user_id: int
    api_key: str


class Shelf(_Payload):
    id: int
    name: str
    book_count: int


class ShelvesResponse(_Payload):
    user: str  # the account email
    shelves: Tuple[Shelf, ...]


class ShelfInfo(_Payload):
    id: int
    name: str


class BookSummary(_Payload):
    id: int
    title: str
    author: Optional[str] = None
    isbn: Optional[str] = None


class ShelfDetailResponse(_Payload):
    shelf: ShelfInfo
    books: Tuple[BookSummary, ...] = ()

    @field_validator("books", mode="before")
    @classmethod
    def _null_books(cls, v):
        return () if v is None else v


class ShelfDetail(_Payload):
    id: int
    name: str
    books: Tuple[BookSummary, ...] = ()

    @classmethod
    def from_response(cls, resp: ShelfDetailResponse) -> "ShelfDetail":
        return cls(id=resp.shelf.id, name=resp.shelf.name, books=resp.books)


class BookDetail(_Payload):
    id: int
    title: str
    author: Optional[str] = None
    isbn: Optional[str] = None
    shelf_id: int
    shelf_name: str
    image_url: Optional[str] = None
    comments: Optional[str] = None


class BookDetailResponse(_Payload):
    book: BookDetail
