# tests/test_forms.py
from blogapp.forms import CommentForm, EntryForm


def test_entry_form_ok():
    form = EntryForm({"title": " Hello ", "content": "Body"})
    assert form.validate() is True
    assert form["title"] == "Hello"
    assert form.errors == {}


def test_entry_form_missing_fields():
    form = EntryForm({"title": ""})
    assert form.validate() is False
    assert form.errors["title"] == [("MsgValueRequired", ())]
    assert form.errors["content"] == [("MsgValueRequired", ())]


def test_entry_title_too_long():
    form = EntryForm({"title": "x" * 201, "content": "Body"})
    assert form.validate() is False
    assert form.errors["title"] == [("MsgValueTooLong", (200,))]


def test_comment_form_default_name():
    form = CommentForm(name="bob@example.com")
    assert form["name"] == "bob@example.com"
    assert form["text"] == ""


def test_comment_form_submitted_name_overrides_default():
    form = CommentForm({"name": "Bob", "text": "hi"}, name="bob@example.com")
    assert form.validate() is True
    assert form["name"] == "Bob"
