"""
Admin session handling for the Literasi console.

The session is an explicit object handed to the dashboard. It is persisted
between CLI invocations in a small JSON file and removed on logout.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from config.config import settings
from literasi.errors import AccessDenied, LoginRequired
from literasi.user import Role

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "Silakan login sebagai admin terlebih dahulu"
ACCESS_DENIED = "Akses Ditolak: halaman ini hanya dapat diakses oleh administrator."


@dataclass(frozen=True)
class AdminSession:
    user_id: str
    role: Role
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {"user_id": self.user_id, "role": self.role.value, "name": self.name}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AdminSession":
        user_id = str(data.get("user_id") or "").strip()
        if not user_id:
            raise ValueError("session has no user_id")
        return AdminSession(user_id=user_id, role=Role(data.get("role")), name=data.get("name"))


def authorize(session: Optional[AdminSession]) -> AdminSession:
    """Gate for every admin view: no session means login, non-admin means denied."""
    if session is None:
        raise LoginRequired(LOGIN_REQUIRED)
    if not session.is_admin:
        raise AccessDenied(ACCESS_DENIED)
    return session


class SessionStore:
    """Loads, saves and clears the persisted admin session."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or settings.session_file).expanduser()

    def load(self) -> Optional[AdminSession]:
        """Return the stored session, or None if absent or unusable."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return AdminSession.from_dict(data)
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unusable session file {self.path}: {e}")
            return None

    def save(self, session: AdminSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(session.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Session saved for user {session.user_id}")

    def clear(self) -> bool:
        """Remove the stored session. Returns False if there was none."""
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.info("Session cleared")
        return True
