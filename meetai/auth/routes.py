"""Auth API Routes - exposes the current session user to the dashboard."""

from flask import Blueprint, current_app, g, jsonify
from werkzeug.local import LocalProxy

from meetai.shared.schemas import ErrorResponseSchema

from .decorators import login_required
from .exceptions import AuthError

auth_bp = Blueprint("auth", __name__)
logger = LocalProxy(lambda: current_app.logger)


@auth_bp.app_errorhandler(AuthError)
def handle_auth_error(error: AuthError):
    """Handle auth failures raised anywhere in the app."""
    logger.info(f"Auth error: {error.message}")
    response = ErrorResponseSchema(**error.to_dict())
    return jsonify(response.model_dump(mode="json")), error.status_code


@auth_bp.route("/session", methods=["GET"])
@login_required
def session():
    """
    Return the signed-in user (used by the dashboard user button).

    Returns:
        JSON response with the session user
    """
    return jsonify({"user": g.session_user.model_dump()}), 200
