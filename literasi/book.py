from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from literasi.errors import ValidationError
from utils.validators import TextValidator

TITLE_AUTHOR_REQUIRED = "Judul dan penulis wajib diisi"
INVALID_COVER_URL = "URL cover harus berupa alamat http(s) yang valid"


@dataclass
class DraftBook:
    """Unsaved book data held by the acquisition workflow."""

    title: str = ""
    author: str = ""
    isbn: str = ""
    description: str = ""
    coverImage: str = ""

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @staticmethod
    def from_lookup(data: Dict[str, Any]) -> "DraftBook":
        # Only the form fields are kept; providers may send more
        values = {}
        for name in DraftBook.field_names():
            value = data.get(name)
            values[name] = "" if value is None else str(value)
        return DraftBook(**values)

    def validate(self) -> None:
        if not TextValidator.validate_required(self.title, self.author):
            raise ValidationError(TITLE_AUTHOR_REQUIRED)
        if not TextValidator.validate_cover_url(self.coverImage):
            raise ValidationError(INVALID_COVER_URL)

    def to_payload(self) -> Dict[str, Any]:
        """Body for POST /api/books and PUT /api/books/:id."""
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn or None,
            "description": self.description or "",
            "coverImage": self.coverImage or "",
        }


@dataclass
class BookOwner:
    userId: str
    userName: str
    userEmail: str = ""
    userBookId: str = ""
    isAvailable: bool = True
    location: Optional[str] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BookOwner":
        return BookOwner(
            userId=data["userId"],
            userName=data.get("userName", ""),
            userEmail=data.get("userEmail", ""),
            userBookId=data.get("userBookId", ""),
            isAvailable=bool(data.get("isAvailable", True)),
            location=data.get("location"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.userId,
            "userName": self.userName,
            "userEmail": self.userEmail,
            "userBookId": self.userBookId,
            "isAvailable": self.isAvailable,
            "location": self.location,
        }


@dataclass
class CatalogBook:
    """Server-owned book record as returned by the admin listing."""

    id: str
    title: str
    author: str
    isbn: Optional[str] = None
    description: Optional[str] = None
    coverImage: Optional[str] = None
    stock: int = 0
    available: int = 0
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    owners: List[BookOwner] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CatalogBook":
        return CatalogBook(
            id=str(data["id"]),
            title=data["title"],
            author=data["author"],
            isbn=data.get("isbn"),
            description=data.get("description"),
            coverImage=data.get("coverImage"),
            stock=int(data.get("stock") or 0),
            available=int(data.get("available") or 0),
            createdAt=data.get("createdAt"),
            updatedAt=data.get("updatedAt"),
            owners=[BookOwner.from_dict(o) for o in data.get("owners") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "description": self.description,
            "coverImage": self.coverImage,
            "stock": self.stock,
            "available": self.available,
            "createdAt": self.createdAt,
            "updatedAt": self.updatedAt,
            "owners": [o.to_dict() for o in self.owners],
        }

    def to_draft(self) -> DraftBook:
        return DraftBook(
            title=self.title,
            author=self.author,
            isbn=self.isbn or "",
            description=self.description or "",
            coverImage=self.coverImage or "",
        )
