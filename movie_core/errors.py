import logging
import math
from flask import request
from werkzeug.exceptions import HTTPException, UnsupportedMediaType
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

# -----------------------------
# Domain errors
# -----------------------------

class MovieError(Exception):
    """Base for errors the API turns into a `{success: false, ...}` envelope."""
    status_code = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, **self.extra}


class ValidationError(MovieError):
    """Malformed or out-of-range input.

    Built with a list of messages (``errors=[...]``) when several fields were
    checked at once; the envelope then carries ``errors`` instead of ``error``.
    """
    status_code = 400

    def __init__(self, message: str | None = None, errors: List[str] | None = None, **extra: Any):
        self.errors = list(errors or [])
        super().__init__(message or "; ".join(self.errors), **extra)

    def to_dict(self) -> Dict[str, Any]:
        if self.errors:
            return {"success": False, "errors": self.errors, **self.extra}
        return super().to_dict()


class NotFoundError(MovieError):
    status_code = 404


class ConflictError(MovieError):
    status_code = 409


class NoDataError(MovieError):
    # stats over an empty collection
    status_code = 404


# -----------------------------
# JSON error handlers
# -----------------------------

def install_json_error_handlers(app):
    @app.errorhandler(MovieError)
    def handle_movie_error(e: MovieError):
        return e.to_dict(), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        if e.code == 404:
            return {
                "success": False,
                "error": "Endpoint not found",
                "hint": "Visit /api for available endpoints",
            }, 404
        return {"success": False, "error": e.description}, e.code

    @app.errorhandler(Exception)
    def handle_generic(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        # Avoid leaking details in responses
        return {"success": False, "error": "Internal server error"}, 500


# -----------------------------
# Validators & helpers
# -----------------------------

def expect_json():
    if request.method in {"POST", "PUT", "PATCH"}:
        ctype = request.headers.get("Content-Type", "")
        if "application/json" not in ctype:
            raise UnsupportedMediaType("Use Content-Type: application/json")

def read_json() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Invalid or missing JSON body")
    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object")
    return data

def parse_movie_id(v: Any) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        raise ValidationError("Invalid movie ID. Must be a number.")

def is_rating(v: Any) -> bool:
    # bools are ints in Python but never a rating
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    # ints may be too large for float(); only floats can be nan/inf
    if isinstance(v, float) and not math.isfinite(v):
        return False
    return 0 <= v <= 10

def is_year(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)
