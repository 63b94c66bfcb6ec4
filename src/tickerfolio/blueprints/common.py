"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ..errors import ErrorKind, InvalidInput, InvalidToken
from ..extensions import get_services
from ..result import Err, Ok, Result, attempt

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.USER_NOT_FOUND: 404,
    ErrorKind.PORTFOLIO_NOT_FOUND: 404,
    ErrorKind.ASSET_NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.CONFIG_ERROR: 500,
    ErrorKind.PRICE_FETCH_FAILED: 502,
}

BEARER_PREFIX = "Bearer "


def _bearer_subject() -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        raise InvalidToken("Invalid token")
    return get_services().tokens.verify(header[len(BEARER_PREFIX):].strip())


def authenticate() -> Result[str]:
    """Resolve the bearer token on the current request to a username."""
    return attempt(_bearer_subject)


def json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    return payload


def error_response(err: Err):
    return jsonify({"error": err.kind.value, "message": err.message}), STATUS_BY_KIND[err.kind]


def respond(result: Result[Any], status: int = 200):
    """Serialize ``Ok`` with ``status`` or map ``Err`` to its status code."""

    if isinstance(result, Err):
        return error_response(result)
    return jsonify(result.value), status


__all__ = [
    "Err",
    "Ok",
    "STATUS_BY_KIND",
    "attempt",
    "authenticate",
    "error_response",
    "json_body",
    "respond",
]
