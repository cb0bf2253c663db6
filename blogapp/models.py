# =============================================================================
# File: blogapp/models.py
# Purpose: ORM models for the blog (User, Entry, Comment)
# Notes:
# - SQLAlchemy 2.0 style (Mapped[...] + mapped_column)
# - DateTime stored naive in SQLite, interpreted as UTC by the app
# =============================================================================
from __future__ import annotations

import datetime as dt

from sqlalchemy import Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Login name and display name at the same time
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    comments: Mapped[list["Comment"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class Entry(Base):
    __tablename__ = "entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    posted: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    comments: Mapped[list["Comment"]] = relationship(
        back_populates="entry",
        order_by="Comment.posted",
    )

    def __repr__(self) -> str:
        return f"<Entry {self.id} {self.title!r}>"


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entry_id: Mapped[int] = mapped_column(ForeignKey("entries.id"), index=True, nullable=False)
    posted: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    entry: Mapped[Entry] = relationship(back_populates="comments")
    user: Mapped[User] = relationship(back_populates="comments")
