"""Directory-specific exceptions for error handling."""
from typing import Optional


class DirectoryError(Exception):
    """Base exception for all directory operations."""
    pass


class TransportError(DirectoryError):
    """Network failure, HTTP error or unreadable body from the directory API.

    Attributes:
        status_code: HTTP status code (None when no response was received)
        message: Underlying error message
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: Optional[int], message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        if status_code is None:
            super().__init__(f"{endpoint}: {message}")
        else:
            super().__init__(f"[{status_code}] {endpoint}: {message}")


class OperationInProgressError(DirectoryError):
    """Another network-bound operation is still pending on this controller."""
    pass
