# blogapp/routes/blog.py
"""
Blog pages:
- /blog            archive (GET) + new entry (POST, admin only)
- /blog/<id>       entry + comments (GET) + new comment (POST, logged in)

Authorization is checked before the view runs (see routes/__init__.py).
"""
from __future__ import annotations

import logging

from flask import Blueprint, abort, flash, g, redirect, render_template, request, url_for

from blogapp.db import SessionLocal
from blogapp.forms import CommentForm, EntryForm
from blogapp.i18n import translate
from blogapp.auth import is_admin
from blogapp.models import Comment, Entry, utcnow

log = logging.getLogger(__name__)

bp = Blueprint("blog", __name__)


def _render_archive(db, form: EntryForm, status: int = 200):
    entries = db.query(Entry).order_by(Entry.posted.desc(), Entry.id.desc()).all()
    return (
        render_template(
            "blog/archive.html",
            entries=entries,
            form=form,
            can_post=is_admin(g.user),
        ),
        status,
    )


def _render_entry(db, entry: Entry, form: CommentForm, status: int = 200):
    comments = (
        db.query(Comment)
        .filter(Comment.entry_id == entry.id)
        .order_by(Comment.posted.asc(), Comment.id.asc())
        .all()
    )
    return (
        render_template("blog/entry.html", entry=entry, comments=comments, form=form),
        status,
    )


@bp.route("/blog", methods=["GET", "POST"])
def archive():
    """List entries, newest first. POST creates a new entry."""
    db = SessionLocal()
    try:
        if request.method == "GET":
            return _render_archive(db, EntryForm())

        form = EntryForm(request.form)
        if not form.validate():
            flash(translate("MsgPleaseCorrectEntry"), "error")
            return _render_archive(db, form, 400)

        entry = Entry(title=form["title"], content=form["content"], posted=utcnow())
        db.add(entry)
        db.commit()
        log.info("Entry %s created: %r", entry.id, entry.title)

        flash(translate("MsgEntryCreated", entry.title), "success")
        return redirect(url_for("blog.entry", entry_id=entry.id))
    finally:
        db.close()


@bp.route("/blog/<int:entry_id>", methods=["GET", "POST"])
def entry(entry_id: int):
    """Show one entry with its comments. POST adds a comment."""
    db = SessionLocal()
    try:
        e = db.get(Entry, entry_id)
        if not e:
            abort(404)

        default_name = g.user.email if g.user else ""

        if request.method == "GET":
            return _render_entry(db, e, CommentForm(name=default_name))

        form = CommentForm(request.form, name=default_name)
        if not form.validate():
            flash(translate("MsgPleaseCorrectComment"), "error")
            return _render_entry(db, e, form, 400)

        comment = Comment(
            entry_id=e.id,
            posted=utcnow(),
            user_id=g.user.id,
            name=form["name"],
            text=form["text"],
        )
        db.add(comment)
        db.commit()
        log.info("Comment %s added to entry %s by %s", comment.id, e.id, g.user.email)

        flash(translate("MsgCommentAdded"), "success")
        return redirect(url_for("blog.entry", entry_id=e.id))
    finally:
        db.close()
