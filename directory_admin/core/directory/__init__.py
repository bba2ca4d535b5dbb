"""Directory API client library.

Architecture:
- client.py: HTTP client with bearer authentication and error mapping
- users.py: User operations (list, create, update, delete)
- exceptions.py: Typed exceptions for error handling

Usage:
    from directory_admin.core.directory import DirectoryClient, UserService

    client = DirectoryClient("https://example.weavy.io", "wys_token")
    users = UserService(client).list_users()
"""
from .client import DirectoryClient, REQUEST_TIMEOUT
from .exceptions import DirectoryError, TransportError, OperationInProgressError
from .users import UserService, USERS_PATH

__all__ = [
    "DirectoryClient",
    "REQUEST_TIMEOUT",
    "DirectoryError",
    "TransportError",
    "OperationInProgressError",
    "UserService",
    "USERS_PATH",
]
