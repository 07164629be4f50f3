from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"

    @property
    def label(self) -> str:
        return "administrator" if self is Role.ADMIN else "user biasa"


@dataclass
class User:
    id: str
    name: str
    email: str
    role: Role
    createdAt: str = ""
    userBooks: int = 0
    borrows: int = 0

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "User":
        counts = data.get("_count") or {}
        return User(
            id=str(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=Role(data.get("role", Role.USER.value)),
            createdAt=data.get("createdAt", ""),
            userBooks=int(counts.get("userBooks", 0)),
            borrows=int(counts.get("borrows", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "createdAt": self.createdAt,
            "_count": {"userBooks": self.userBooks, "borrows": self.borrows},
        }
