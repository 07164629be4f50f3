import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar
from urllib.parse import quote

import httpx

from literasi.book import CatalogBook, DraftBook
from literasi.errors import NetworkError, RequestError
from literasi.services.http_client import ApiHTTPClient
from literasi.user import Role, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fallback messages shown when the backend does not supply one
FETCH_BOOKS_FAILED = "Gagal mengambil data buku"
FETCH_USERS_FAILED = "Gagal mengambil data user"
BOOK_NOT_FOUND = "Buku tidak ditemukan"
SEARCH_FAILED = "Gagal mencari buku"
SAVE_BOOK_FAILED = "Gagal menyimpan buku"
SAVE_BOOK_CRASHED = "Terjadi kesalahan saat menyimpan buku"
UPDATE_BOOK_FAILED = "Gagal memperbarui buku"
DELETE_BOOK_FAILED = "Gagal menghapus buku"
ROLE_CHANGE_FAILED = "Gagal mengubah role user"


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the `error` field out of a failure payload."""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str) and message.strip():
            return message
    return fallback


def _parse_list(data: Any, parse: Callable[[Dict[str, Any]], T], description: str, failure: str) -> List[T]:
    """Parse a listing payload; a malformed record fails the whole listing."""
    try:
        return [parse(item) for item in data or []]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"{description} returned a malformed record: {e!r}")
        raise NetworkError(failure) from e


class CatalogClient:
    """Client for the library backend: book catalog, ISBN lookup and users.

    Every operation raises ``RequestError`` for a non-2xx answer and
    ``NetworkError`` when the request could not complete. Messages come from
    the server's ``{"error": ...}`` payload where present.
    """

    def __init__(self, http: Optional[ApiHTTPClient] = None):
        self.http = http or ApiHTTPClient()

    async def _send(
        self,
        call: Awaitable[httpx.Response],
        description: str,
        failure: str,
        network_failure: Optional[str] = None,
    ) -> Any:
        try:
            response = await call
        except httpx.RequestError as e:
            logger.error(f"{description} failed: {e!r}")
            raise NetworkError(network_failure or failure) from e

        if not response.is_success:
            message = _error_message(response, failure)
            logger.error(f"{description} failed: {response.status_code} - {message}")
            raise RequestError(message, response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{description} returned invalid JSON: {e}")
            raise NetworkError(network_failure or failure) from e

    # ------------------------- Books ------------------------- #
    async def list_admin_books(self) -> List[CatalogBook]:
        data = await self._send(self.http.get("/api/books/admin"), "GET /api/books/admin", FETCH_BOOKS_FAILED)
        return _parse_list(data, CatalogBook.from_dict, "GET /api/books/admin", FETCH_BOOKS_FAILED)

    async def search_by_isbn(self, isbn: str) -> Dict[str, Any]:
        """Resolve an ISBN to draft-shaped metadata via the backend's providers."""
        data = await self._send(
            self.http.get("/api/books/search", params={"isbn": isbn}),
            f"ISBN search {isbn}",
            BOOK_NOT_FOUND,
            network_failure=SEARCH_FAILED,
        )
        if not isinstance(data, dict):
            raise RequestError(BOOK_NOT_FOUND, 404)
        return data

    async def create_book(self, draft: DraftBook) -> Dict[str, Any]:
        data = await self._send(
            self.http.post("/api/books", json=draft.to_payload()),
            "POST /api/books",
            SAVE_BOOK_FAILED,
            network_failure=SAVE_BOOK_CRASHED,
        )
        return data or {}

    async def update_book(self, book_id: str, draft: DraftBook) -> Dict[str, Any]:
        path = f"/api/books/{quote(str(book_id), safe='')}"
        data = await self._send(self.http.put(path, json=draft.to_payload()), f"PUT {path}", UPDATE_BOOK_FAILED)
        return data or {}

    async def delete_book(self, book_id: str) -> None:
        path = f"/api/books/{quote(str(book_id), safe='')}"
        await self._send(self.http.delete(path), f"DELETE {path}", DELETE_BOOK_FAILED)

    # ------------------------- Users ------------------------- #
    async def list_users(self) -> List[User]:
        data = await self._send(self.http.get("/api/users"), "GET /api/users", FETCH_USERS_FAILED)
        return _parse_list(data, User.from_dict, "GET /api/users", FETCH_USERS_FAILED)

    async def update_user_role(self, user_id: str, role: Role) -> None:
        path = f"/api/users/{quote(str(user_id), safe='')}/role"
        await self._send(self.http.put(path, json={"role": Role(role).value}), f"PUT {path}", ROLE_CHANGE_FAILED)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
