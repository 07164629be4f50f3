import json
from datetime import datetime
from typing import Any, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.config import settings

_OUTPUT_MODES = {"plain", "json", "rich"}
_output_mode = settings.output_mode if settings.output_mode in _OUTPUT_MODES else "plain"

_console = Console()


def set_output_mode(mode: str) -> None:
    global _output_mode
    mode = (mode or "").lower().strip()
    if mode in _OUTPUT_MODES:
        _output_mode = mode


def get_output_mode() -> str:
    return _output_mode


def format_date(value: str) -> str:
    """Render an ISO timestamp like '18 Okt 2026'; unparseable values pass through."""
    months = ["Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"]
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return value or "-"
    return f"{dt.day} {months[dt.month - 1]} {dt.year}"


def _owner_summary(book: Any) -> str:
    if not book.owners:
        return "-"
    parts = []
    for owner in book.owners:
        label = owner.userName
        if not owner.isAvailable:
            label += " (Dipinjam)"
        parts.append(label)
    return ", ".join(parts)


def _location_summary(book: Any) -> str:
    if not book.owners:
        return "-"
    return ", ".join(owner.location or "-" for owner in book.owners)


def print_books(books: List[Any]) -> None:
    """Print the admin book listing in the current output mode.
    - plain: 'id - Title by Author [available/stock]' lines, or 'Belum ada buku terdaftar'
    - json: list of book objects
    - rich: table with owners and locations
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
        return

    if not books:
        print("Belum ada buku terdaftar")
        return

    if mode == "rich":
        table = Table(title=f"📚 Total {len(books)} buku terdaftar", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Judul", style="white")
        table.add_column("Penulis", style="white")
        table.add_column("Pemilik", style="white")
        table.add_column("Lokasi", style="dim")
        table.add_column("Tersedia", justify="right")
        for b in books:
            available = f"{b.available}/{b.stock}"
            if b.available == 0:
                available = f"[bold red]{available}[/]"
            table.add_row(b.id, b.title, b.author, _owner_summary(b), _location_summary(b), available)
        _console.print(table)
    else:
        for b in books:
            print(f"{b.id} - {b.title} by {b.author} [{b.available}/{b.stock}]")


def print_users(users: List[Any]) -> None:
    """Print the user listing in the current output mode."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([u.to_dict() for u in users], ensure_ascii=False))
        return

    if not users:
        print("Belum ada user terdaftar")
        return

    if mode == "rich":
        table = Table(title="👥 Manajemen User", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Nama")
        table.add_column("Email")
        table.add_column("Role")
        table.add_column("Buku", justify="right")
        table.add_column("Peminjaman", justify="right")
        table.add_column("Bergabung")
        for u in users:
            role = f"[bold green]{u.role.value}[/]" if u.role.value == "ADMIN" else u.role.value
            table.add_row(u.id, u.name, u.email, role, str(u.userBooks), str(u.borrows), format_date(u.createdAt))
        _console.print(table)
    else:
        for u in users:
            print(f"{u.id} - {u.name} <{u.email}> {u.role.value}")


def print_draft(draft: Any, title: str = "Lengkapi informasi dan simpan buku") -> None:
    """Show a draft book before it is saved."""
    fields: Dict[str, str] = {
        "Judul": draft.title,
        "Penulis": draft.author,
        "ISBN": draft.isbn,
        "Deskripsi": draft.description,
        "URL Cover": draft.coverImage,
    }
    if get_output_mode() == "rich":
        content = "\n".join(f"[bold]{k}:[/] {v or '-'}" for k, v in fields.items())
        _console.print(Panel.fit(content, title=title, border_style="blue"))
    else:
        for k, v in fields.items():
            print(f"{k}: {v or '-'}")
