from types import SimpleNamespace

import pytest
from flask import Flask, abort
from jinja2 import DictLoader

from directory_admin.api.errors import register_error_handlers


@pytest.fixture()
def flask_client():
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.jinja_loader = DictLoader({"errors/error.html": "{{ title }} - {{ message }}"})
    app.logger = SimpleNamespace(error=lambda *args, **kwargs: None)

    register_error_handlers(app)

    @app.route("/crash")
    def crash():
        raise RuntimeError("boom")

    @app.route("/form/error")
    def form_error():
        abort(400, "invalid payload")

    with app.test_client() as client:
        yield client


JSON = {"Accept": "application/json"}
HTML = {"Accept": "text/html"}


def test_unhandled_exception_returns_json(flask_client):
    response = flask_client.get("/crash", headers=JSON)
    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal Server Error", "message": "An unexpected error occurred"}


def test_unhandled_exception_renders_html(flask_client):
    response = flask_client.get("/crash", headers=HTML)
    assert response.status_code == 500
    assert b"Internal Server Error - An unexpected error occurred" in response.data
    assert b"boom" not in response.data


def test_bad_request_keeps_description(flask_client):
    response = flask_client.get("/form/error", headers=JSON)
    assert response.status_code == 400
    assert response.get_json() == {"error": "Bad Request", "message": "invalid payload"}


def test_not_found_html(flask_client):
    response = flask_client.get("/missing", headers=HTML)
    assert response.status_code == 404
    assert response.data == b"Not Found - Resource not found"
