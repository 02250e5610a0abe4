"""
Request-level middleware applied to every route.

- Request logging: one INFO line per request with method, path, status
  and duration.
- Error rendering: Werkzeug HTTP errors (unknown route, wrong verb) become
  JSON bodies, and any unhandled exception is logged with its traceback and
  answered with a JSON 500 instead of crashing the worker.
"""

from __future__ import annotations

import logging
import time

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


def _start_timer() -> None:
    g.request_started_at = time.perf_counter()


def _log_request(response: Response) -> Response:
    started_at = g.pop("request_started_at", None)
    elapsed_ms = (time.perf_counter() - started_at) * 1000 if started_at else 0.0
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.path,
        response.status_code,
        elapsed_ms,
    )
    return response


def _handle_http_error(error: HTTPException) -> tuple[Response, int]:
    """Render Werkzeug HTTP errors as JSON."""
    status_code = error.code or 500
    response = jsonify({"error": error.description or error.name})
    valid_methods = getattr(error, "valid_methods", None)
    if valid_methods:
        response.headers["Allow"] = ", ".join(valid_methods)
    return response, status_code


def _handle_unexpected_error(error: Exception) -> tuple[Response, int]:
    """Recover from unhandled exceptions with a generic JSON 500."""
    logger.exception("Unhandled error while serving %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


def register_middleware(app: Flask) -> None:
    """Attach request logging and JSON error handling to ``app``."""
    app.before_request(_start_timer)
    app.after_request(_log_request)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected_error)
