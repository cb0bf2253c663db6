# blogapp/routes/auth.py
"""
Authentication subsite mounted under /auth:
- /auth/login   provider forms (GET) + login (POST)
- /auth/logout  clear the session user
"""
from __future__ import annotations

from urllib.parse import urlsplit

from flask import Blueprint, flash, redirect, render_template, request, url_for

from blogapp.auth import PROVIDERS, get_or_create_user, login_user, logout_user
from blogapp.db import SessionLocal
from blogapp.i18n import translate

bp = Blueprint("auth", __name__, url_prefix="/auth")


def _safe_next(target: str | None) -> str:
    """Only follow local redirect targets."""
    if not target:
        return url_for("home.index")
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith("/"):
        return url_for("home.index")
    return target


@bp.route("/login", methods=["GET", "POST"])
def login():
    next_url = request.values.get("next", "")

    if request.method == "GET":
        return render_template("auth/login.html", providers=PROVIDERS, next_url=next_url)

    provider = PROVIDERS.get(request.form.get("provider", "email"))
    email = provider.authenticate(request.form) if provider else None
    if not email:
        flash(translate("MsgInvalidLogin"), "error")
        return (
            render_template("auth/login.html", providers=PROVIDERS, next_url=next_url),
            400,
        )

    with SessionLocal() as db:
        user = get_or_create_user(db, email)
        login_user(user)

    flash(translate("MsgNowLoggedIn"), "success")
    return redirect(_safe_next(next_url))


@bp.route("/logout", methods=["GET", "POST"])
def logout():
    logout_user()
    flash(translate("MsgNowLoggedOut"), "success")
    return redirect(url_for("home.index"))
