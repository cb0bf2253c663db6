# =============================================================================
# File: blogapp/auth.py
# Purpose: Session user lookup, login providers and the authorization rules.
# =============================================================================
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from flask import current_app, session
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import User

log = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


# -------------------------------------------------------------------
# Session user
# -------------------------------------------------------------------


def get_current_user(db: Session) -> Optional[User]:
    """Récupère l'utilisateur courant via la session Flask."""
    uid = session.get(SESSION_USER_KEY)
    if uid is None:
        return None
    try:
        uid = int(uid)
    except (TypeError, ValueError):
        return None
    return db.get(User, uid)


def _find_user(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter_by(email=email).first()


def get_or_create_user(db: Session, email: str) -> User:
    """Return the User for `email`, creating it on first login."""
    email = email.strip().lower()
    user = _find_user(db, email)
    if user is not None:
        return user

    user = User(email=email)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same email between lookup and insert
        db.rollback()
        log.info("User %s created concurrently, reusing it", email)
        return db.query(User).filter_by(email=email).one()

    log.info("Created user %s", email)
    return user


def login_user(user: User) -> None:
    session[SESSION_USER_KEY] = user.id
    log.info("User %s logged in", user.email)


def logout_user() -> None:
    uid = session.pop(SESSION_USER_KEY, None)
    if uid is not None:
        log.info("User %s logged out", uid)


def is_admin(user: Optional[User]) -> bool:
    if user is None:
        return False
    admin_email = (current_app.config.get("ADMIN_EMAIL") or "").strip().lower()
    return bool(admin_email) and user.email.lower() == admin_email


# -------------------------------------------------------------------
# Login providers
# -------------------------------------------------------------------


def validate_email(email: str) -> bool:
    """Very basic email format validation."""
    if not email:
        return False
    email = email.strip()
    if " " in email or email.count("@") != 1:
        return False
    local, domain = email.split("@")
    return bool(local) and "." in domain and not domain.startswith(".") and not domain.endswith(".")


class LoginProvider:
    """A way of proving who the user is; returns an email address or None."""

    name = "base"

    def authenticate(self, form) -> Optional[str]:
        raise NotImplementedError


class EmailProvider(LoginProvider):
    """Trusts the submitted email address (development / tutorial login)."""

    name = "email"

    def authenticate(self, form) -> Optional[str]:
        email = (form.get("email") or "").strip()
        if not validate_email(email):
            return None
        return email.lower()


PROVIDERS: dict[str, LoginProvider] = {p.name: p for p in (EmailProvider(),)}


# -------------------------------------------------------------------
# Authorization
# -------------------------------------------------------------------


@dataclass(frozen=True)
class AuthResult:
    kind: str  # "authorized" | "authentication_required" | "unauthorized"
    message_key: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind == "authorized"


AUTHORIZED = AuthResult("authorized")
AUTHENTICATION_REQUIRED = AuthResult("authentication_required")


def unauthorized(message_key: str) -> AuthResult:
    return AuthResult("unauthorized", message_key)


def is_authorized(endpoint: Optional[str], is_write: bool, user: Optional[User]) -> AuthResult:
    """
    Static rule table, first match wins:

    - write to the archive (new entry): logged in AND admin
    - write to an entry page (new comment): logged in
    - everything else: allowed
    """
    if not is_write:
        return AUTHORIZED

    if endpoint == "blog.archive":
        if user is None:
            return AUTHENTICATION_REQUIRED
        if not is_admin(user):
            return unauthorized("MsgNotAnAdmin")
        return AUTHORIZED

    if endpoint == "blog.entry":
        if user is None:
            return AUTHENTICATION_REQUIRED
        return AUTHORIZED

    return AUTHORIZED
