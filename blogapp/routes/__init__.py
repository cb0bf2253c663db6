# =============================================================================
# File: blogapp/routes/__init__.py
# Purpose: Register all blueprints and the per-request auth hooks.
# =============================================================================
from __future__ import annotations

import logging

from flask import Flask, abort, g, jsonify, redirect, request, url_for

from blogapp.auth import (
    AUTHENTICATION_REQUIRED,
    WRITE_METHODS,
    get_current_user,
    is_authorized,
)
from blogapp.db import SessionLocal
from blogapp.i18n import translate

from .home import bp as home_bp
from .blog import bp as blog_bp
from .auth import bp as auth_bp

log = logging.getLogger(__name__)


def _wants_json() -> bool:
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def load_user():
    """Attach the session user (or None) to g for views and templates."""
    with SessionLocal() as db:
        g.user = get_current_user(db)


def check_authorization():
    result = is_authorized(request.endpoint, request.method in WRITE_METHODS, g.user)
    if result.ok:
        return None

    if result == AUTHENTICATION_REQUIRED:
        log.debug("Login required for %s %s", request.method, request.path)
        if _wants_json():
            return jsonify({"error": "authentication_required"}), 401
        return redirect(url_for("auth.login", next=request.full_path.rstrip("?")))

    log.info("Denied %s %s for %s", request.method, request.path, g.user.email)
    abort(403, description=translate(result.message_key))


def register_routes(app: Flask) -> None:
    """Enregistre tous les blueprints sur l'app Flask."""
    app.register_blueprint(home_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(auth_bp)

    app.before_request(load_user)
    app.before_request(check_authorization)
    app.context_processor(lambda: {"current_user": g.get("user")})
