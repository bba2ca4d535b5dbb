"""Pytest shared fixtures."""
import json
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from directory_admin.config import AppConfig

BASE_URL = "https://directory.test"
API_KEY = "wys_test_key"


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, url: str = "", text: str | None = None):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        self.reason = "OK" if status_code < 400 else "Error"
        if text is not None:
            self.text = text
        else:
            self.text = "" if payload is None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeDirectoryAPI:
    """Records outgoing requests and replies with queued responses.

    Responses are queued per HTTP method; GETs fall back to the current
    ``users`` list wrapped in ``{"data": [...]}``.
    """

    def __init__(self):
        self.calls: list[dict] = []
        self.users: list[dict] = []
        self.queued: dict[str, list] = {"GET": [], "POST": [], "PATCH": [], "DELETE": []}

    def queue(self, method: str, response) -> None:
        self.queued[method].append(response)

    def _reply(self, method: str, url: str, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.queued[method]:
            response = self.queued[method].pop(0)
            if isinstance(response, Exception):
                raise response
            response.url = response.url or url
            return response
        if method == "GET":
            return StubResponse({"data": list(self.users)}, url=url)
        if method == "DELETE":
            return StubResponse(None, status_code=204, url=url)
        body = kwargs.get("json") or {}
        return StubResponse({"id": 99, "created_at": "t", "updated_at": "t", "is_trashed": False, **body}, url=url)

    def methods(self) -> list[str]:
        return [call["method"] for call in self.calls]


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """Fail any HTTP call a test did not stub explicitly."""
    if request.node.get_closest_marker("integration"):
        return

    def _unexpected(method):
        def _call(url, *args, **kwargs):
            raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")
        return _call

    for method in ("get", "post", "patch", "delete"):
        monkeypatch.setattr(requests, method, _unexpected(method.upper()))


@pytest.fixture()
def fake_api(monkeypatch):
    """Route requests.get/post/patch/delete to an in-memory directory."""
    api = FakeDirectoryAPI()
    monkeypatch.setattr(requests, "get", lambda url, **kw: api._reply("GET", url, **kw))
    monkeypatch.setattr(requests, "post", lambda url, **kw: api._reply("POST", url, **kw))
    monkeypatch.setattr(requests, "patch", lambda url, **kw: api._reply("PATCH", url, **kw))
    monkeypatch.setattr(requests, "delete", lambda url, **kw: api._reply("DELETE", url, **kw))
    return api


@pytest.fixture()
def app_config():
    return AppConfig(
        api_key=API_KEY,
        base_url=BASE_URL,
        request_timeout=5,
        secret_key="test-secret",
        session_cookie_secure=False,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Flask Test Client
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def flask_app(monkeypatch, tmp_path, app_config):
    monkeypatch.setenv("FLASK_SESSION_DIR", str(tmp_path / "sessions"))
    from directory_admin.flask_app import create_app

    app = create_app(app_config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


def get_csrf_token(client) -> str:
    """Get CSRF token from session."""
    with client.session_transaction() as session:
        token = session.get("_csrf_token")
        if not token:
            token = "test-csrf-token"
            session["_csrf_token"] = token
        return token


def user_payload(uid: str, name: str, **extra) -> dict:
    payload = {
        "id": extra.pop("id", 1),
        "uid": uid,
        "name": name,
        "created_at": "t",
        "updated_at": "t",
        "is_trashed": False,
    }
    payload.update(extra)
    return payload


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires a live directory API)"
    )
