import pytest

from literasi.book import CatalogBook, DraftBook
from literasi.errors import ValidationError
from literasi.user import Role, User
from utils.validators import ISBNValidator, TextValidator


def test_draft_from_lookup_keeps_only_form_fields():
    draft = DraftBook.from_lookup({
        "title": "Dune",
        "author": "Frank Herbert",
        "isbn": "9780441013593",
        "description": None,
        "publisher": "Ace",
    })
    assert draft == DraftBook(title="Dune", author="Frank Herbert", isbn="9780441013593")


def test_draft_payload_normalises_optional_fields():
    payload = DraftBook(title="Dune", author="Frank Herbert").to_payload()
    assert payload == {"title": "Dune", "author": "Frank Herbert", "isbn": None, "description": "", "coverImage": ""}


def test_draft_validation():
    DraftBook(title="Dune", author="Frank Herbert", coverImage="https://covers.test/dune.jpg").validate()
    with pytest.raises(ValidationError, match="Judul dan penulis wajib diisi"):
        DraftBook(title="Dune").validate()
    with pytest.raises(ValidationError):
        DraftBook(title="Dune", author="Frank Herbert", coverImage="ftp://covers.test/dune.jpg").validate()


def test_catalog_book_to_draft():
    book = CatalogBook.from_dict({"id": 7, "title": "Dune", "author": "Frank Herbert", "stock": "3", "available": 2})
    assert book.id == "7"
    assert (book.stock, book.available, book.owners) == (3, 2, [])
    assert book.to_draft() == DraftBook(title="Dune", author="Frank Herbert")


def test_user_from_dict_reads_counts():
    user = User.from_dict({
        "id": "u1", "name": "Budi", "email": "budi@literasi.test", "role": "ADMIN",
        "createdAt": "2026-01-15T08:00:00.000Z", "_count": {"userBooks": 4, "borrows": 2},
    })
    assert user.role is Role.ADMIN
    assert (user.userBooks, user.borrows) == (4, 2)
    assert User.from_dict(user.to_dict()) == user


@pytest.mark.parametrize("isbn,valid", [
    ("9780441013593", True),
    ("978-0-441-01359-3", True),
    ("0441013597", True),
    ("080442957X", True),
    ("9780441013594", False),
    ("12345", False),
    ("", False),
])
def test_isbn_validator(isbn, valid):
    assert ISBNValidator.is_valid_isbn(isbn) is valid


def test_text_validator():
    assert TextValidator.validate_required("a", "b")
    assert not TextValidator.validate_required("a", " ")
    assert not TextValidator.validate_required(None)
    assert TextValidator.validate_cover_url("")
    assert not TextValidator.validate_cover_url("http://")
