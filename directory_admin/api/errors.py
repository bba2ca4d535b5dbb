"""Error handlers for the application."""
from flask import render_template, jsonify, request
from werkzeug.exceptions import HTTPException


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors."""
        message = getattr(error, "description", None) or "Invalid request"
        if _wants_json():
            return jsonify({"error": "Bad Request", "message": message}), 400
        return render_template("errors/error.html", title="Bad Request", message=message), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        if _wants_json():
            return jsonify({"error": "Not Found", "message": "Resource not found"}), 404
        return render_template("errors/error.html", title="Not Found", message="Resource not found"), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error."""
        app.logger.error(f"Internal error: {error}", exc_info=True)
        return _internal_error_response()

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # Pass through HTTP errors
        if isinstance(error, HTTPException):
            return error

        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return _internal_error_response()


def _internal_error_response():
    if _wants_json():
        return jsonify({"error": "Internal Server Error", "message": "An unexpected error occurred"}), 500
    return render_template(
        "errors/error.html",
        title="Internal Server Error",
        message="An unexpected error occurred",
    ), 500


def _wants_json():
    """Check if the client wants a JSON response."""
    return request.accept_mimetypes.accept_json and \
           not request.accept_mimetypes.accept_html
