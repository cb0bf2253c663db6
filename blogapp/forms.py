# =============================================================================
# File: blogapp/forms.py
# Purpose: Entry / Comment form validation.
# Errors are message keys, translated at render time.
# =============================================================================
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

# (message key, positional params)
FieldError = Tuple[str, tuple]


class Form:
    # field name -> max length (None = unbounded)
    fields: Dict[str, Optional[int]] = {}

    def __init__(self, data: Optional[Mapping[str, str]] = None, **defaults: str):
        data = data or {}
        self.data: Dict[str, str] = {}
        for name in self.fields:
            value = data.get(name)
            if value is None:
                value = defaults.get(name, "")
            self.data[name] = value.strip()
        self.errors: Dict[str, List[FieldError]] = {}

    def validate(self) -> bool:
        """Required + max length checks; fills self.errors."""
        self.errors = {}
        for name, max_len in self.fields.items():
            value = self.data[name]
            if not value:
                self.errors.setdefault(name, []).append(("MsgValueRequired", ()))
            elif max_len is not None and len(value) > max_len:
                self.errors.setdefault(name, []).append(("MsgValueTooLong", (max_len,)))
        return not self.errors

    def __getitem__(self, name: str) -> str:
        return self.data[name]


class EntryForm(Form):
    fields = {"title": 200, "content": None}


class CommentForm(Form):
    fields = {"name": 100, "text": None}
