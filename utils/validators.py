import re
from typing import Optional
from urllib.parse import urlparse


class ISBNValidator:
    """ISBN helpers for display and lookup input.

    Lookups are not blocked on checksum failures; the backend decides whether
    an ISBN resolves.
    """

    @staticmethod
    def normalize_isbn(raw: Optional[str]) -> str:
        if raw is None:
            return ""
        s = re.sub(r"[^0-9Xx]", "", raw)
        return s.upper()

    @staticmethod
    def is_valid_isbn(isbn: Optional[str]) -> bool:
        s = ISBNValidator.normalize_isbn(isbn)
        if len(s) == 10:
            if not s[:-1].isdigit():
                return False
            total = sum(i * int(ch) for i, ch in enumerate(s[:-1], 1))
            check = s[-1]
            check_val = 10 if check == "X" else int(check)
            return (total + 10 * check_val) % 11 == 0
        if len(s) == 13 and s.isdigit():
            total = sum((1 if i % 2 == 0 else 3) * int(ch) for i, ch in enumerate(s[:-1]))
            return (10 - (total % 10)) % 10 == int(s[-1])
        return False


class TextValidator:
    """Field checks applied to book forms before submission."""

    @staticmethod
    def is_blank(text: Optional[str]) -> bool:
        return text is None or not text.strip()

    @staticmethod
    def validate_required(*values: Optional[str]) -> bool:
        return not any(TextValidator.is_blank(v) for v in values)

    @staticmethod
    def validate_cover_url(url: Optional[str]) -> bool:
        # Empty is fine; the cover is optional
        if TextValidator.is_blank(url):
            return True
        parsed = urlparse(url.strip())
        return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
