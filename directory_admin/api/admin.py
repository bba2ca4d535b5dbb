"""User directory page: form, table and delete confirmation routes."""
from __future__ import annotations
import logging

from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app, session, abort

from directory_admin.core.controller import DirectoryController, DirectoryState
from directory_admin.core.directory import DirectoryClient, UserService
from directory_admin.core.validators import validate_required, optional_text
from directory_admin.core import view

bp = Blueprint("admin", __name__)

STATE_SESSION_KEY = "directory_state"

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Helper Functions
# ─────────────────────────────────────────────────────────────────────────────
def _user_service() -> UserService:
    cfg = current_app.config["APP_CONFIG"]
    return UserService(DirectoryClient.from_config(cfg))


def _load_controller(confirm=None) -> DirectoryController:
    """Rebuild the controller from the state kept in the session."""
    raw = session.get(STATE_SESSION_KEY)
    state = DirectoryState.from_dict(raw) if raw else None
    controller = DirectoryController(_user_service(), state=state)
    if confirm is not None:
        controller.confirm = confirm
    return controller


def _save_controller(controller: DirectoryController) -> None:
    session[STATE_SESSION_KEY] = controller.state.to_dict()


def _back_to_index():
    return redirect(url_for("admin.index"))


# ─────────────────────────────────────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────────────────────────────────────
@bp.route("/")
def index():
    """Render the form and the user table."""
    cfg = current_app.config["APP_CONFIG"]
    first_visit = STATE_SESSION_KEY not in session
    controller = _load_controller()
    if first_visit:
        controller.mount(cfg)
        _save_controller(controller)

    state = controller.state
    return render_template(
        "admin.html",
        title="User Management",
        state=state,
        rows=view.table_rows(state.users),
        form_title=view.form_title(state),
        submit_label=view.submit_label(state),
        empty_message=view.EMPTY_TABLE_MESSAGE,
        is_configured=cfg.is_configured,
    )


@bp.post("/users")
def submit():
    """Create a user, or update the one being edited."""
    controller = _load_controller()
    editing = controller.state.editing_id is not None

    # The uid input is disabled while editing, browsers do not post it
    if not editing:
        controller.edit_field("uid", request.form.get("uid", "").strip())
    controller.edit_field("name", request.form.get("name", "").strip())
    controller.edit_field("email", optional_text(request.form.get("email")))
    controller.edit_field("directory", optional_text(request.form.get("directory")))

    try:
        if not editing:
            validate_required(controller.state.form.uid, "User ID")
        validate_required(controller.state.form.name, "Name")
    except ValueError as exc:
        _save_controller(controller)
        flash(f"Validation error: {exc}", "error")
        return _back_to_index()

    controller.submit()
    _save_controller(controller)
    return _back_to_index()


@bp.post("/users/<uid>/edit")
def begin_edit(uid: str):
    """Load a listed user into the form."""
    controller = _load_controller()
    user = controller.find_user(uid)
    if user is None:
        abort(404)
    controller.begin_edit(user)
    _save_controller(controller)
    return _back_to_index()


@bp.post("/cancel")
def cancel_edit():
    """Leave edit mode and clear the form."""
    controller = _load_controller()
    controller.cancel_edit()
    _save_controller(controller)
    return _back_to_index()


@bp.post("/refresh")
def refresh():
    """Reload the user list from the directory service."""
    controller = _load_controller()
    controller.refresh()
    _save_controller(controller)
    return _back_to_index()


@bp.get("/users/<uid>/delete")
def confirm_delete(uid: str):
    """Ask the operator to confirm a delete."""
    controller = _load_controller()
    user = controller.find_user(uid)
    if user is None:
        abort(404)
    return render_template("confirm_delete.html", title="Delete User", user=user)


@bp.post("/users/<uid>/delete")
def delete(uid: str):
    """Delete a user once the confirmation form was accepted."""
    confirmed = request.form.get("confirm") == "yes"
    controller = _load_controller(confirm=lambda _uid: confirmed)
    controller.delete(uid)
    _save_controller(controller)
    return _back_to_index()
