"""Book acquisition workflow.

Drives the "add book" dialog: the admin picks manual entry or ISBN search,
a successful search is reviewed and edited before saving, and a save closes
the dialog and refreshes the catalog listing.

The current mode is a single state object. Every transition installs a new
one, so a request that started in one state can tell whether the workflow
has moved on by the time the response arrives.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from literasi.book import DraftBook
from literasi.errors import (
    InvalidTransition,
    LiterasiError,
    ValidationError,
    WorkflowBusy,
)
from literasi.services.catalog_client import CatalogClient
from utils.validators import ISBNValidator

logger = logging.getLogger(__name__)

EMPTY_ISBN = "ISBN tidak boleh kosong"


class WorkflowMode(str, Enum):
    CLOSED = "closed"
    CHOOSING_METHOD = "choosing-method"
    MANUAL_ENTRY = "manual-entry"
    ISBN_SEARCH = "isbn-search"
    REVIEW_RESULT = "review-search-result"


@dataclass
class Closed:
    mode = WorkflowMode.CLOSED


@dataclass
class ChoosingMethod:
    mode = WorkflowMode.CHOOSING_METHOD


@dataclass
class ManualEntry:
    mode = WorkflowMode.MANUAL_ENTRY
    draft: DraftBook = field(default_factory=DraftBook)
    error: str = ""
    submitting: bool = False


@dataclass
class IsbnSearch:
    mode = WorkflowMode.ISBN_SEARCH
    isbn: str = ""
    error: str = ""
    searching: bool = False


@dataclass
class ReviewResult:
    mode = WorkflowMode.REVIEW_RESULT
    draft: DraftBook = field(default_factory=DraftBook)
    error: str = ""
    submitting: bool = False


WorkflowState = Union[Closed, ChoosingMethod, ManualEntry, IsbnSearch, ReviewResult]
DraftState = Union[ManualEntry, ReviewResult]


class AcquisitionWorkflow:
    """Controller for adding a book by manual entry or ISBN lookup.

    ``on_created`` is awaited once after every successful save; the
    dashboard uses it to re-fetch the catalog listing.
    """

    def __init__(
        self,
        client: CatalogClient,
        on_created: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        self.client = client
        self.on_created = on_created
        self.state: WorkflowState = Closed()
        # Message of the last failed post-save refresh; the save itself stands
        self.refresh_error = ""

    # ------------------------- Introspection ------------------------- #
    @property
    def mode(self) -> WorkflowMode:
        return self.state.mode

    @property
    def draft(self) -> Optional[DraftBook]:
        return getattr(self.state, "draft", None)

    @property
    def error(self) -> str:
        return getattr(self.state, "error", "")

    @property
    def busy(self) -> bool:
        return bool(getattr(self.state, "searching", False) or getattr(self.state, "submitting", False))

    def _expect(self, *allowed: type) -> None:
        if not isinstance(self.state, allowed):
            names = ", ".join(cls.mode.value for cls in allowed)
            raise InvalidTransition(f"Operasi tidak tersedia pada mode {self.mode.value} (butuh: {names})")

    def _transition(self, state: WorkflowState) -> None:
        logger.debug(f"Workflow {self.mode.value} -> {state.mode.value}")
        self.state = state

    # ------------------------- Navigation ------------------------- #
    def open(self) -> None:
        """Show the method picker. Never resumes an earlier draft."""
        self._expect(Closed)
        self._transition(ChoosingMethod())

    def cancel(self) -> None:
        """Close the dialog from any mode, discarding all draft data."""
        self._transition(Closed())

    def choose_manual(self) -> None:
        self._expect(ChoosingMethod)
        self._transition(ManualEntry())

    def choose_isbn_search(self) -> None:
        self._expect(ChoosingMethod)
        self._transition(IsbnSearch())

    def back(self) -> None:
        self._expect(ManualEntry, IsbnSearch)
        if getattr(self.state, "submitting", False):
            raise WorkflowBusy("Buku sedang disimpan")
        # An in-flight lookup keeps running; its result is discarded
        self._transition(ChoosingMethod())

    def search_again(self) -> None:
        self._expect(ReviewResult)
        if self.state.submitting:
            raise WorkflowBusy("Buku sedang disimpan")
        self._transition(IsbnSearch())

    # ------------------------- Editing ------------------------- #
    def set_isbn(self, isbn: str) -> None:
        self._expect(IsbnSearch)
        if self.state.searching:
            raise WorkflowBusy("Pencarian sedang berjalan")
        self.state.isbn = isbn
        self.state.error = ""

    def update_draft(self, **changes: str) -> DraftBook:
        self._expect(ManualEntry, ReviewResult)
        if self.state.submitting:
            raise WorkflowBusy("Buku sedang disimpan")
        unknown = set(changes) - set(DraftBook.field_names())
        if unknown:
            raise ValueError(f"Unknown draft field(s): {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(self.state.draft, name, "" if value is None else value)
        return self.state.draft

    # ------------------------- Requests ------------------------- #
    async def lookup(self, isbn: Optional[str] = None) -> Optional[DraftBook]:
        """Resolve the typed ISBN and move to review on success.

        Returns the populated draft, or None when the workflow left this
        search before the response arrived.
        """
        self._expect(IsbnSearch)
        state = self.state
        if state.searching:
            raise WorkflowBusy("Pencarian sedang berjalan")
        if isbn is not None:
            state.isbn = isbn

        query = state.isbn.strip()
        if not query:
            state.error = EMPTY_ISBN
            raise ValidationError(EMPTY_ISBN)
        if not ISBNValidator.is_valid_isbn(query):
            logger.info(f"ISBN {query!r} fails checksum, searching anyway")

        state.searching = True
        state.error = ""
        try:
            data = await self.client.search_by_isbn(query)
        except LiterasiError as e:
            if self.state is not state:
                logger.info(f"Discarding stale lookup failure for {query!r}: {e.message}")
                return None
            state.error = e.message
            raise
        finally:
            state.searching = False

        if self.state is not state:
            logger.info(f"Discarding stale lookup result for {query!r}")
            return None

        draft = DraftBook.from_lookup(data)
        self._transition(ReviewResult(draft=draft))
        return draft

    async def submit(self) -> Dict[str, Any]:
        """Validate the draft, create the book, close and refresh the listing."""
        self._expect(ManualEntry, ReviewResult)
        state: DraftState = self.state
        if state.submitting:
            raise WorkflowBusy("Buku sedang disimpan")

        try:
            state.draft.validate()
        except ValidationError as e:
            state.error = e.message
            raise

        state.submitting = True
        state.error = ""
        try:
            created = await self.client.create_book(state.draft)
        except LiterasiError as e:
            state.error = e.message
            raise
        finally:
            state.submitting = False

        if self.state is state:
            self._transition(Closed())
        logger.info(f"Book created: {state.draft.title!r} by {state.draft.author!r}")

        self.refresh_error = ""
        if self.on_created is not None:
            try:
                await self.on_created()
            except LiterasiError as e:
                logger.error(f"Listing refresh after save failed: {e.message}")
                self.refresh_error = e.message
        return created
