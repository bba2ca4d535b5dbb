"""Low-level HTTP client for the directory REST API.

Handles bearer authentication and maps transport failures to TransportError.
Every call carries an explicit timeout (WEAVY_REQUEST_TIMEOUT, 30 s default).
"""
from __future__ import annotations
import logging
from typing import Optional, Dict, Any

import requests

from ...config.settings import DEFAULT_REQUEST_TIMEOUT as REQUEST_TIMEOUT
from .exceptions import TransportError

logger = logging.getLogger(__name__)


class DirectoryClient:
    """HTTP client for the directory API with a static bearer token.

    Usage:
        client = DirectoryClient("https://example.weavy.io", "wys_...")
        response = client.get("/api/users")
    """

    def __init__(self, base_url: str, api_key: str, timeout: Optional[float] = REQUEST_TIMEOUT):
        """Initialize directory client.

        Args:
            base_url: Service base URL (trailing slash is ignored)
            api_key: Bearer token sent with every request
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg) -> "DirectoryClient":
        """Build a client from an AppConfig."""
        return cls(cfg.base_url, cfg.api_key, cfg.request_timeout)

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(self, path: str, params: Optional[Dict] = None) -> requests.Response:
        """Execute an authenticated GET request.

        Raises:
            TransportError: On network failure or HTTP error
        """
        url = f"{self.base_url}{path}"
        return self._send(requests.get, url, params=params, headers=self._headers())

    def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Execute an authenticated POST request with a JSON body.

        Raises:
            TransportError: On network failure or HTTP error
        """
        url = f"{self.base_url}{path}"
        return self._send(requests.post, url, json=json, headers=self._headers(json_body=True))

    def patch(self, path: str, json: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Execute an authenticated PATCH request with a JSON body.

        Raises:
            TransportError: On network failure or HTTP error
        """
        url = f"{self.base_url}{path}"
        return self._send(requests.patch, url, json=json, headers=self._headers(json_body=True))

    def delete(self, path: str) -> requests.Response:
        """Execute an authenticated DELETE request.

        Raises:
            TransportError: On network failure or HTTP error
        """
        url = f"{self.base_url}{path}"
        return self._send(requests.delete, url, headers=self._headers())

    def _send(self, method, url: str, **kwargs) -> requests.Response:
        try:
            resp = method(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(None, str(exc), url) from exc
        self._handle_error(resp, url)
        return resp

    def _handle_error(self, resp: requests.Response, url: str) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            TransportError: If response status indicates error
        """
        if resp.status_code >= 400:
            logger.warning("Directory API returned %s for %s: %s", resp.status_code, url, resp.text)
            raise TransportError(resp.status_code, f"Request failed with status code {resp.status_code}", url)

    @staticmethod
    def json_body(resp: requests.Response, url: str) -> Any:
        """Decode a JSON response body.

        Raises:
            TransportError: If the body is not valid JSON
        """
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(resp.status_code, f"Malformed response body: {exc}", url) from exc
