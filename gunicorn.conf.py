"""Gunicorn configuration for the directory admin UI.

Run with:
    gunicorn -c gunicorn.conf.py directory_admin.wsgi:app
"""
import os
from pathlib import Path

bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:5000")
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
accesslog = "-"
errorlog = "-"


def post_fork(server, worker):
    """
    Called just after a worker has been forked.

    Reports where the directory bearer token will come from. settings.py
    reads /run/secrets first, then WEAVY_API_KEY.
    """
    secret_file = Path("/run/secrets") / "weavy_api_key"
    if secret_file.is_file():
        worker.log.info("Using WEAVY API key from /run/secrets")
    elif os.environ.get("WEAVY_API_KEY"):
        worker.log.info("Using WEAVY API key from environment")
    else:
        worker.log.warning("No WEAVY API key configured; user list will stay empty")
