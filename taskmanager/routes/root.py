"""Site-root endpoints: the plain-text welcome page and a health check."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify

root_bp = Blueprint("root", __name__)

WELCOME_MESSAGE = "Welcome to Task Manager API"


@root_bp.route("/", methods=["GET"])
def index() -> Response:
    """Return the welcome message as plain text."""
    return Response(WELCOME_MESSAGE, status=200, mimetype="text/plain")


@root_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({"status": "healthy", "service": "tasks"}), 200
