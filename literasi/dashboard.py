import logging
from typing import Callable, List, Optional

from literasi.book import CatalogBook, DraftBook
from literasi.errors import ValidationError
from literasi.services.catalog_client import CatalogClient
from literasi.session import AdminSession, authorize
from literasi.user import Role, User
from literasi.workflow import AcquisitionWorkflow

logger = logging.getLogger(__name__)

DELETE_BOOK_PROMPT = "Apakah Anda yakin ingin menghapus buku ini?"

# Asked before a request is sent; a False answer aborts without a call
Confirm = Callable[[str], bool]


def role_change_prompt(role: Role) -> str:
    return f"Apakah Anda yakin ingin mengubah role user ini menjadi {Role(role).label}?"


class AdminDashboard:
    """Book and user listings for an authorized admin session.

    Listings are never patched locally: every mutation is followed by a
    re-fetch of the affected listing.
    """

    def __init__(self, session: Optional[AdminSession], client: CatalogClient) -> None:
        self.session = session
        self.client = client
        self.books: List[CatalogBook] = []
        self.users: List[User] = []
        self.books_loading = False
        self.users_loading = False
        self.workflow = AcquisitionWorkflow(client, on_created=self.refresh_books)

    async def start(self) -> None:
        """Check the session, then load both listings."""
        authorize(self.session)
        await self.refresh_books()
        await self.refresh_users()

    # ------------------------- Listings ------------------------- #
    async def refresh_books(self) -> List[CatalogBook]:
        self.books_loading = True
        try:
            self.books = await self.client.list_admin_books()
        finally:
            self.books_loading = False
        return self.books

    async def refresh_users(self) -> List[User]:
        self.users_loading = True
        try:
            self.users = await self.client.list_users()
        finally:
            self.users_loading = False
        return self.users

    # ------------------------- Mutations ------------------------- #
    async def delete_book(self, book_id: str, confirm: Confirm) -> bool:
        """Delete a book after confirmation. Returns False if the admin declined."""
        authorize(self.session)
        if not confirm(DELETE_BOOK_PROMPT):
            logger.info(f"Delete of book {book_id} cancelled")
            return False
        await self.client.delete_book(book_id)
        logger.info(f"Book {book_id} deleted by {self.session.user_id}")
        await self.refresh_books()
        return True

    async def change_role(self, user_id: str, role: Role, confirm: Confirm) -> bool:
        """Change a user's role after confirmation. Returns False if declined."""
        authorize(self.session)
        role = Role(role)
        if not confirm(role_change_prompt(role)):
            logger.info(f"Role change of user {user_id} cancelled")
            return False
        await self.client.update_user_role(user_id, role)
        logger.info(f"User {user_id} set to {role.value} by {self.session.user_id}")
        await self.refresh_users()
        return True

    async def edit_book(self, book_id: str, **changes: str) -> CatalogBook:
        """Apply field changes to an existing book and re-fetch the listing."""
        authorize(self.session)
        current = self.find_book(book_id)
        if current is None:
            await self.refresh_books()
            current = self.find_book(book_id)
        if current is None:
            raise ValidationError(f"Buku {book_id} tidak ditemukan")
        draft = current.to_draft()
        unknown = set(changes) - set(DraftBook.field_names())
        if unknown:
            raise ValueError(f"Unknown book field(s): {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            if value is not None:
                setattr(draft, name, value)
        draft.validate()
        await self.client.update_book(book_id, draft)
        await self.refresh_books()
        return self.find_book(book_id) or current

    def find_book(self, book_id: str) -> Optional[CatalogBook]:
        for book in self.books:
            if book.id == str(book_id):
                return book
        return None
