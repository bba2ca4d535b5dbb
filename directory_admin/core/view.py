"""Presentation helpers shared by the web page and the CLI."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .controller import DirectoryState
from .models import User

EMPTY_TABLE_MESSAGE = "No users found"
TABLE_HEADERS = ("ID", "Name", "Email", "Directory", "Actions")
ROW_ACTIONS = "Edit/Delete"


@dataclass(frozen=True)
class UserRow:
    """One rendered table line."""
    id: int
    uid: str
    name: str
    email: str
    directory: str

    def cells(self) -> tuple[str, ...]:
        return (self.uid, self.name, self.email, self.directory, ROW_ACTIONS)

    def __str__(self) -> str:
        return " | ".join(self.cells())


def user_row(user: User) -> UserRow:
    return UserRow(
        id=user.id,
        uid=user.uid,
        name=user.name,
        email=user.email or "-",
        directory=user.directory_name,
    )


def table_rows(users: Iterable[User]) -> list[UserRow]:
    return [user_row(user) for user in users]


def form_title(state: DirectoryState) -> str:
    return "Edit User" if state.editing_id else "Create User"


def submit_label(state: DirectoryState) -> str:
    return "Update" if state.editing_id else "Create"


def render_table(users: Iterable[User]) -> str:
    """Plain-text table used by the CLI."""
    rows = table_rows(users)
    if not rows:
        return EMPTY_TABLE_MESSAGE
    lines = [" | ".join(TABLE_HEADERS)]
    lines.extend(str(row) for row in rows)
    return "\n".join(lines)
