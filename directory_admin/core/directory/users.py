"""Directory user operations: list, create, update, delete."""
from __future__ import annotations
import logging
from typing import List
from urllib.parse import quote

from ..models import User, UserFormData
from .client import DirectoryClient
from .exceptions import TransportError

USERS_PATH = "/api/users"

logger = logging.getLogger(__name__)


def _user_path(uid: str) -> str:
    return f"{USERS_PATH}/{quote(uid, safe='')}"


def _parse_user(item, status_code: int, endpoint: str) -> User:
    """Decode one user object, mapping bad shapes to TransportError."""
    if not isinstance(item, dict):
        raise TransportError(status_code, "Malformed response body: expected a user object", endpoint)
    try:
        return User.from_dict(item)
    except (TypeError, ValueError) as exc:
        logger.warning("Malformed user object from %s: %s", endpoint, exc)
        raise TransportError(status_code, f"Malformed response body: {exc}", endpoint) from exc


class UserService:
    """Service for managing directory users."""

    def __init__(self, client: DirectoryClient):
        """Initialize user service.

        Args:
            client: Configured directory client
        """
        self.client = client

    def list_users(self) -> List[User]:
        """Return every user of the ``data`` array, in service order.

        Any body whose ``data`` is not a list yields an empty list.

        Raises:
            TransportError: On network failure, HTTP error, non-JSON body or
                a ``data`` entry that is not a well-formed user object
        """
        resp = self.client.get(USERS_PATH)
        endpoint = resp.url or USERS_PATH
        body = self.client.json_body(resp, endpoint)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            logger.info("User list response has no data array; treating as empty")
            return []
        return [_parse_user(item, resp.status_code, endpoint) for item in data]

    def create_user(self, form: UserFormData) -> User:
        """Create a user from the full form payload.

        Raises:
            TransportError: On network failure, HTTP error or malformed body
        """
        resp = self.client.post(USERS_PATH, json=form.to_payload())
        user = self._user_from_response(resp)
        logger.info("Created user '%s' (id=%s)", user.uid, user.id)
        return user

    def update_user(self, uid: str, form: UserFormData) -> User:
        """Update the user addressed by ``uid``; the body never carries the uid.

        Raises:
            TransportError: On network failure, HTTP error or malformed body
        """
        resp = self.client.patch(_user_path(uid), json=form.to_payload(include_uid=False))
        user = self._user_from_response(resp)
        logger.info("Updated user '%s'", uid)
        return user

    def delete_user(self, uid: str) -> None:
        """Delete the user addressed by ``uid``.

        Raises:
            TransportError: On network failure or HTTP error
        """
        self.client.delete(_user_path(uid))
        logger.info("Deleted user '%s'", uid)

    def _user_from_response(self, resp) -> User:
        endpoint = resp.url or USERS_PATH
        body = self.client.json_body(resp, endpoint)
        return _parse_user(body, resp.status_code, endpoint)
