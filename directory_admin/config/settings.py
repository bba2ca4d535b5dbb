"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
import sys
import secrets
from dataclasses import dataclass
from pathlib import Path

DEFAULT_WEAVY_URL = "https://8015b5dbc0724d38882ac90397c27649.weavy.io"
DEFAULT_REQUEST_TIMEOUT = 30.0


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                print(f"[settings] Loaded {secret_name} from /run/secrets", file=sys.stderr)
                return secret_value
        except OSError as e:
            print(f"[settings] Failed to read /run/secrets/{secret_name}: {e}", file=sys.stderr)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


@dataclass
class AppConfig:
    """Application configuration container."""
    # Directory service
    api_key: str = ""
    base_url: str = DEFAULT_WEAVY_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    # Flask
    secret_key: str = ""
    session_cookie_secure: bool = True

    @property
    def is_configured(self) -> bool:
        """True when both the bearer token and the base URL are present."""
        return bool(self.api_key and self.base_url)

    @property
    def masked_api_key(self) -> str:
        if not self.api_key:
            return "EMPTY"
        return "***"


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        print(f"[settings] Ignoring invalid WEAVY_REQUEST_TIMEOUT={raw!r}", file=sys.stderr)
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


def load_settings(api_key: str | None = None, base_url: str | None = None) -> AppConfig:
    """Load application settings from /run/secrets and environment.

    Missing values never raise: the API key falls back to an empty string and
    the base URL to the default Weavy environment.

    Args:
        api_key: Explicit bearer token, takes precedence over secrets and env
        base_url: Explicit service URL, takes precedence over WEAVY_URL
    """
    api_key = api_key or _load_secret_from_file("weavy_api_key", "WEAVY_API_KEY") or ""
    base_url = (base_url or os.environ.get("WEAVY_URL") or DEFAULT_WEAVY_URL).rstrip("/")
    request_timeout = _parse_timeout(os.environ.get("WEAVY_REQUEST_TIMEOUT"))

    secret_key = _load_secret_from_file("flask_secret_key", "FLASK_SECRET_KEY")
    if not secret_key:
        # Sessions do not survive a restart with a generated key
        secret_key = secrets.token_urlsafe(48)
        print("[settings] Generated temporary FLASK_SECRET_KEY", file=sys.stderr)

    session_cookie_secure = os.environ.get("FLASK_SESSION_COOKIE_SECURE", "true").lower() == "true"

    cfg = AppConfig(
        api_key=api_key,
        base_url=base_url,
        request_timeout=request_timeout,
        secret_key=secret_key,
        session_cookie_secure=session_cookie_secure,
    )
    print(f"[settings] base_url={cfg.base_url}; api_key={cfg.masked_api_key}; timeout={cfg.request_timeout}s", file=sys.stderr)

    if not cfg.api_key:
        print("[settings] WARNING: WEAVY_API_KEY is empty; the user list will not be loaded.", file=sys.stderr)

    return cfg
