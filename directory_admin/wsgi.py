"""Application instance for Gunicorn (``gunicorn directory_admin.wsgi:app``)."""
from directory_admin.flask_app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
