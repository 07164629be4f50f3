import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.prompt import Confirm, Prompt

from config.config import settings
from literasi.dashboard import AdminDashboard
from literasi.errors import AccessDenied, LiterasiError, LoginRequired
from literasi.services.catalog_client import CatalogClient
from literasi.session import AdminSession, SessionStore
from literasi.user import Role
from literasi.workflow import WorkflowMode
from utils.ui_helpers import print_books, print_draft, print_users, set_output_mode

APP_NAME = settings.app_name


T = TypeVar("T")


def build_client() -> CatalogClient:
    """Client for the configured backend (replaced in tests)."""
    return CatalogClient()


def session_store() -> SessionStore:
    return SessionStore()


def _run(action: Callable[[AdminDashboard], Awaitable[T]]) -> T:
    """Run an admin action against a fresh dashboard, mapping errors to exit codes."""

    async def runner() -> T:
        session = session_store().load()
        async with build_client() as client:
            dashboard = AdminDashboard(session, client)
            return await action(dashboard)

    try:
        return asyncio.run(runner())
    except LoginRequired as e:
        print(e.message)
        print("Gunakan: literasi-admin login USER_ID --role ADMIN")
        raise typer.Exit(code=1)
    except AccessDenied as e:
        print(e.message)
        raise typer.Exit(code=1)
    except LiterasiError as e:
        print(f"Error: {e.message}")
        raise typer.Exit(code=1)


# --- Typer CLI ---
app = typer.Typer(help=f"{APP_NAME} - kelola buku dan manajemen user")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Format keluaran: plain | json | rich (bawaan: plain)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Tampilkan log diagnostik"),
):
    """Global options for the console (output mode, logging)."""
    level = logging.DEBUG if verbose or settings.debug else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if output:
        set_output_mode(output)


# ------------------------- Session ------------------------- #
@app.command("login")
def cli_login(
    user_id: str,
    role: Role = typer.Option(Role.ADMIN, "--role", "-r", case_sensitive=False, help="Role user yang login"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Nama tampilan"),
):
    """Simpan sesi admin untuk perintah berikutnya."""
    session = AdminSession(user_id=user_id, role=role, name=name)
    session_store().save(session)
    print(f"Login sebagai {name or user_id} ({role.value})")
    if not session.is_admin:
        print("Peringatan: dashboard admin hanya dapat diakses oleh administrator.")


@app.command("logout")
def cli_logout():
    """Hapus sesi yang tersimpan."""
    if session_store().clear():
        print("Logout berhasil")
    else:
        print("Tidak ada sesi aktif")


@app.command("whoami")
def cli_whoami():
    """Tampilkan sesi yang sedang aktif."""
    session = session_store().load()
    if session is None:
        print("Tidak ada sesi aktif")
        raise typer.Exit(code=1)
    print(f"{session.name or session.user_id} ({session.role.value})")


# ------------------------- Listings ------------------------- #
@app.command("books")
def cli_books():
    """Daftar buku (tampilan admin, termasuk pemilik)."""

    async def action(dashboard: AdminDashboard):
        await dashboard.start()
        return dashboard.books

    print_books(_run(action))


@app.command("users")
def cli_users():
    """Daftar user beserta role dan jumlah buku/peminjaman."""

    async def action(dashboard: AdminDashboard):
        await dashboard.start()
        return dashboard.users

    print_users(_run(action))


# ------------------------- Mutations ------------------------- #
def _confirmer(yes: bool) -> Callable[[str], bool]:
    if yes:
        return lambda message: True
    return lambda message: Confirm.ask(message, default=False)


@app.command("delete-book")
def cli_delete_book(
    book_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Lewati konfirmasi"),
):
    """Hapus buku berdasarkan ID."""

    async def action(dashboard: AdminDashboard):
        await dashboard.start()
        return await dashboard.delete_book(book_id, _confirmer(yes))

    if _run(action):
        print(f"Buku {book_id} berhasil dihapus")
    else:
        print("Dibatalkan")


@app.command("set-role")
def cli_set_role(
    user_id: str,
    role: Role = typer.Argument(..., case_sensitive=False, help="ADMIN atau USER"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Lewati konfirmasi"),
):
    """Ubah role user (ADMIN / USER)."""

    async def action(dashboard: AdminDashboard):
        await dashboard.start()
        return await dashboard.change_role(user_id, role, _confirmer(yes))

    if _run(action):
        print(f"Role user {user_id} diubah menjadi {role.value}")
    else:
        print("Dibatalkan")


@app.command("edit-book")
def cli_edit_book(
    book_id: str,
    title: Optional[str] = typer.Option(None, "--title", help="Judul buku"),
    author: Optional[str] = typer.Option(None, "--author", help="Nama penulis"),
    isbn: Optional[str] = typer.Option(None, "--isbn", help="ISBN"),
    description: Optional[str] = typer.Option(None, "--description", help="Deskripsi"),
    cover: Optional[str] = typer.Option(None, "--cover", help="URL cover buku"),
):
    """Perbarui informasi buku yang sudah ada."""

    async def action(dashboard: AdminDashboard):
        await dashboard.start()
        return await dashboard.edit_book(
            book_id, title=title, author=author, isbn=isbn, description=description, coverImage=cover
        )

    book = _run(action)
    print(f"Buku diperbarui: {book.title} - {book.author}")


# ------------------------- Acquisition ------------------------- #
def _prompt_draft_fields(dashboard: AdminDashboard) -> None:
    draft = dashboard.workflow.draft
    dashboard.workflow.update_draft(
        title=Prompt.ask("Judul Buku *", default=draft.title),
        author=Prompt.ask("Penulis *", default=draft.author),
        isbn=Prompt.ask("ISBN (opsional)", default=draft.isbn),
        description=Prompt.ask("Deskripsi (opsional)", default=draft.description),
        coverImage=Prompt.ask("URL Cover Buku (opsional)", default=draft.coverImage),
    )


async def _save(dashboard: AdminDashboard) -> None:
    try:
        await dashboard.workflow.submit()
    except LiterasiError as e:
        # The workflow keeps the draft; show the message and let the admin retry
        print(f"Error: {e.message}")
        return
    print("Buku berhasil ditambahkan")
    if dashboard.workflow.refresh_error:
        print(f"Peringatan: {dashboard.workflow.refresh_error}")
    else:
        print(f"Total {len(dashboard.books)} buku terdaftar")


async def _acquire(dashboard: AdminDashboard, isbn: Optional[str], manual: bool) -> bool:
    workflow = dashboard.workflow
    workflow.open()
    preset_isbn = isbn
    saved = False

    while workflow.mode is not WorkflowMode.CLOSED:
        mode = workflow.mode

        if mode is WorkflowMode.CHOOSING_METHOD:
            if manual:
                manual = False
                workflow.choose_manual()
                continue
            if preset_isbn is not None:
                workflow.choose_isbn_search()
                continue
            choice = Prompt.ask("Pilih metode tambah buku", choices=["isbn", "manual", "batal"], default="isbn")
            if choice == "isbn":
                workflow.choose_isbn_search()
            elif choice == "manual":
                workflow.choose_manual()
            else:
                workflow.cancel()

        elif mode is WorkflowMode.ISBN_SEARCH:
            if preset_isbn is not None:
                value, preset_isbn = preset_isbn, None
            else:
                value = Prompt.ask("ISBN (10 atau 13 digit, 'kembali' atau 'batal')", default="")
            if value.strip().lower() == "kembali":
                workflow.back()
                continue
            if value.strip().lower() == "batal":
                workflow.cancel()
                continue
            print("Mencari...")
            try:
                await workflow.lookup(value)
            except LiterasiError as e:
                print(f"Error: {e.message}")

        elif mode is WorkflowMode.MANUAL_ENTRY:
            _prompt_draft_fields(dashboard)
            choice = Prompt.ask("Aksi", choices=["simpan", "kembali", "batal"], default="simpan")
            if choice == "simpan":
                await _save(dashboard)
                saved = workflow.mode is WorkflowMode.CLOSED
            elif choice == "kembali":
                workflow.back()
            else:
                workflow.cancel()

        elif mode is WorkflowMode.REVIEW_RESULT:
            print_draft(workflow.draft)
            choice = Prompt.ask("Aksi", choices=["simpan", "ubah", "cari-lagi", "batal"], default="simpan")
            if choice == "simpan":
                await _save(dashboard)
                saved = workflow.mode is WorkflowMode.CLOSED
            elif choice == "ubah":
                _prompt_draft_fields(dashboard)
            elif choice == "cari-lagi":
                workflow.search_again()
            else:
                workflow.cancel()

    return saved


@app.command("add-book")
def cli_add_book(
    isbn: Optional[str] = typer.Option(None, "--isbn", help="Langsung cari berdasarkan ISBN"),
    manual: bool = typer.Option(False, "--manual", help="Langsung ke input manual"),
):
    """Tambah buku: cari via ISBN atau input manual, lalu tinjau dan simpan."""
    if isbn is not None and manual:
        print("Pilih salah satu: --isbn atau --manual")
        raise typer.Exit(code=2)

    async def action(dashboard: AdminDashboard):
        await dashboard.start()
        return await _acquire(dashboard, isbn, manual)

    if not _run(action):
        print("Dibatalkan")


if __name__ == "__main__":
    app()
