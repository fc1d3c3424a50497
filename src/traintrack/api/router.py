"""Single JSON endpoint dispatched on the ``action`` query parameter.

Every response uses the envelope ``{"success": true, "data": ...}`` or
``{"success": false, "error": "..."}``; file exports bypass it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from flask import Blueprint, Response, current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..common.validators import as_text
from ..core.exceptions import AuthenticationError, DomainError
from ..users.model import User

logger = logging.getLogger(__name__)


def respond(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def params() -> Dict[str, Any]:
    """Query string merged with the JSON body (body wins)."""
    merged: Dict[str, Any] = {k: v for k, v in request.args.items() if k != "action"}
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        merged.update(body)
    return merged


def text_param(data: Dict[str, Any], key: str) -> str:
    """Scalar request field as text; missing and null both read as ``""``."""
    return as_text(data.get(key), key)


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_actor() -> User:
    actor = g.get("actor")
    if actor is None:
        raise AuthenticationError("Authentication required.")
    return actor


@dataclass(frozen=True)
class Action:
    name: str
    handler: Callable[[], Any]
    methods: Tuple[str, ...]
    public: bool


class ActionRouter:
    def __init__(self, name: str = "api"):
        self.blueprint = Blueprint(name, __name__)
        self._actions: Dict[str, Action] = {}
        self._before_dispatch: list[Callable[[str], None]] = []
        self._authenticate: Optional[Callable[[Optional[str]], User]] = None

        self.blueprint.add_url_rule("/api", "dispatch", self.dispatch, methods=["GET", "POST"])
        self.blueprint.add_url_rule("/api/", "dispatch_slash", self.dispatch, methods=["GET", "POST"])

    def set_authenticator(self, authenticate: Callable[[Optional[str]], User]) -> None:
        self._authenticate = authenticate

    def before_dispatch(self, fn: Callable[[str], None]) -> Callable[[str], None]:
        self._before_dispatch.append(fn)
        return fn

    def action(self, name: str, *, methods: Tuple[str, ...] = ("GET",), public: bool = False):
        def decorator(fn):
            if name in self._actions:
                raise ValueError(f"Duplicate action: {name}")

            self._actions[name] = Action(name=name, handler=fn, methods=tuple(methods), public=public)
            return fn

        return decorator

    def dispatch(self):
        name = request.args.get("action", "").strip()
        action = self._actions.get(name)
        if action is None:
            return fail("Unknown action.", 400)
        if request.method not in action.methods:
            return fail(f"Action '{name}' requires {' or '.join(action.methods)}.", 405)

        for hook in self._before_dispatch:
            hook(name)

        if not action.public:
            if self._authenticate is None:
                raise RuntimeError("No authenticator configured")
            g.actor = self._authenticate(bearer_token())

        result = action.handler()
        if isinstance(result, (Response, tuple)):
            return result
        return respond(result)


def register_error_handlers(app) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return fail(str(exc), exc.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return fail(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.full_path)
        if bool(current_app.config.get("DEBUG", False)):
            return fail(str(exc), 500)
        return fail("Internal server error.", 500)
