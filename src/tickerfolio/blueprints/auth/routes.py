"""Registration, login and token check endpoints."""

from __future__ import annotations

from ...extensions import get_services
from ..common import Err, Ok, attempt, authenticate, error_response, json_body, respond
from . import bp


def _register() -> dict:
    body = json_body()
    username = str(body.get("username") or "").strip()
    token = get_services().credentials.register(
        username, str(body.get("password") or ""), body.get("email")
    )
    return {"token": token, "message": "User registered successfully", "username": username}


def _login() -> dict:
    body = json_body()
    username = str(body.get("username") or "").strip()
    token = get_services().credentials.login(username, str(body.get("password") or ""))
    return {"token": token, "message": "Login successful", "username": username}


@bp.post("/register")
def register():
    return respond(attempt(_register), status=201)


@bp.post("/login")
def login():
    return respond(attempt(_login))


@bp.get("/verify")
def verify():
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(Ok({"valid": True, "message": "Token is valid", "username": subject.value}))
