"""View/controller state machine for the user directory screen.

State changes go through ``reduce(state, action)``, a pure function.
``DirectoryController`` runs the gateway calls and feeds their outcome back
as actions.

Flow:
    mount ──> list ──> render
    submit/delete ──> gateway ──> list (success) | error (failure)
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Union

from .directory import OperationInProgressError, TransportError, UserService
from .models import User, UserFormData

SUBMIT_FAILED_MESSAGE = "Operation failed"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryState:
    users: tuple[User, ...] = ()
    form: UserFormData = field(default_factory=UserFormData.empty)
    editing_id: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form used to keep the state in the web session."""
        return {
            "users": [user.to_dict() for user in self.users],
            "form": self.form.to_dict(),
            "editing_id": self.editing_id,
            "loading": self.loading,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DirectoryState":
        return cls(
            users=tuple(User.from_dict(item) for item in data.get("users") or []),
            form=UserFormData.from_dict(data.get("form") or {}),
            editing_id=data.get("editing_id"),
            loading=bool(data.get("loading", False)),
            error=data.get("error"),
        )


# ─────────────────────────────────────────────────────────────────────────────
# Actions
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ListStarted:
    pass


@dataclass(frozen=True)
class ListSucceeded:
    users: tuple[User, ...]


@dataclass(frozen=True)
class ListFailed:
    message: str


@dataclass(frozen=True)
class FieldEdited:
    name: str
    value: Any


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class SubmitFailed:
    message: str


@dataclass(frozen=True)
class EditBegan:
    user: User


@dataclass(frozen=True)
class EditCancelled:
    pass


@dataclass(frozen=True)
class DeleteStarted:
    pass


@dataclass(frozen=True)
class DeleteFailed:
    message: str


Action = Union[
    ListStarted, ListSucceeded, ListFailed, FieldEdited,
    SubmitStarted, SubmitSucceeded, SubmitFailed,
    EditBegan, EditCancelled, DeleteStarted, DeleteFailed,
]


def reduce(state: DirectoryState, action: Action) -> DirectoryState:
    """Return the state that follows ``action``."""
    if isinstance(action, (ListStarted, SubmitStarted, DeleteStarted)):
        return replace(state, loading=True, error=None)
    if isinstance(action, ListSucceeded):
        return replace(state, users=tuple(action.users), loading=False)
    if isinstance(action, ListFailed):
        return replace(state, users=(), error=action.message, loading=False)
    if isinstance(action, FieldEdited):
        return replace(state, form=state.form.with_field(action.name, action.value))
    if isinstance(action, SubmitSucceeded):
        return replace(state, form=UserFormData.empty(), editing_id=None, loading=False)
    if isinstance(action, (SubmitFailed, DeleteFailed)):
        return replace(state, error=action.message, loading=False)
    if isinstance(action, EditBegan):
        return replace(state, form=UserFormData.from_user(action.user), editing_id=action.user.uid)
    if isinstance(action, EditCancelled):
        return replace(state, form=UserFormData.empty(), editing_id=None)
    raise TypeError(f"Unsupported action: {action!r}")


def _decline(uid: str) -> bool:
    return False


class DirectoryController:
    """Runs gateway calls for the directory screen and tracks its state.

    Only one network-bound operation may be pending at a time; a second one
    raises OperationInProgressError and leaves state untouched.

    Args:
        service: User gateway
        confirm: Called with the uid before a delete; deletes only on True
        state: Initial state (defaults to the empty screen)
    """

    def __init__(
        self,
        service: UserService,
        confirm: Callable[[str], bool] = _decline,
        state: Optional[DirectoryState] = None,
    ):
        self.service = service
        self.confirm = confirm
        self.state = state or DirectoryState()
        self._in_flight = threading.Lock()

    def dispatch(self, action: Action) -> DirectoryState:
        self.state = reduce(self.state, action)
        return self.state

    def _begin(self, operation: str) -> None:
        if not self._in_flight.acquire(blocking=False):
            raise OperationInProgressError(f"Cannot {operation}: another operation is in progress")

    def mount(self, cfg) -> DirectoryState:
        """Initial load; lists users only when the service is configured."""
        if cfg.api_key and cfg.base_url:
            return self.refresh()
        logger.info("Directory API not configured; skipping initial user list")
        return self.state

    def refresh(self) -> DirectoryState:
        """List users and replace the local collection."""
        self._begin("list users")
        try:
            return self._list()
        finally:
            self._in_flight.release()

    def _list(self) -> DirectoryState:
        self.dispatch(ListStarted())
        try:
            users = self.service.list_users()
        except TransportError as exc:
            logger.error("Error fetching users: %s", exc)
            return self.dispatch(ListFailed(f"Failed to fetch users: {exc.message}"))
        return self.dispatch(ListSucceeded(tuple(users)))

    def edit_field(self, name: str, value: Any) -> DirectoryState:
        return self.dispatch(FieldEdited(name, value))

    def begin_edit(self, user: User) -> DirectoryState:
        return self.dispatch(EditBegan(user))

    def cancel_edit(self) -> DirectoryState:
        return self.dispatch(EditCancelled())

    def submit(self) -> DirectoryState:
        """Create or update from the current draft, then re-list.

        The list is refreshed before the draft is cleared. Failures show a
        generic message; the cause goes to the log.
        """
        self._begin("submit")
        try:
            self.dispatch(SubmitStarted())
            form = self.state.form
            try:
                if self.state.editing_id:
                    self.service.update_user(self.state.editing_id, form)
                else:
                    self.service.create_user(form)
            except TransportError as exc:
                logger.warning("Submit for '%s' failed: %s", self.state.editing_id or form.uid, exc)
                return self.dispatch(SubmitFailed(SUBMIT_FAILED_MESSAGE))
            self._list()
            return self.dispatch(SubmitSucceeded())
        finally:
            self._in_flight.release()

    def delete(self, uid: str) -> DirectoryState:
        """Delete ``uid`` after confirmation, then re-list."""
        if not self.confirm(uid):
            logger.debug("Delete of '%s' declined", uid)
            return self.state
        self._begin("delete")
        try:
            self.dispatch(DeleteStarted())
            try:
                self.service.delete_user(uid)
            except TransportError as exc:
                logger.error("Error deleting user '%s': %s", uid, exc)
                return self.dispatch(DeleteFailed(f"Failed to delete user: {exc.message}"))
            return self._list()
        finally:
            self._in_flight.release()

    def find_user(self, uid: str) -> Optional[User]:
        return next((user for user in self.state.users if user.uid == uid), None)
