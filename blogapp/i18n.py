# =============================================================================
# File: blogapp/i18n.py
# Purpose: Per-language message tables loaded from messages/<lang>.yml
# =============================================================================
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml
from flask import current_app, g, request, session

log = logging.getLogger(__name__)

# Type alias for readability: message key -> template string
MessageTable = Dict[str, str]

LANG_PARAM = "_LANG"


class MessageNotFound(KeyError):
    """Raised when no table (default language included) defines a key."""


def _load_table(path: Path) -> MessageTable:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a mapping, got %s", path, type(data).__name__)
        return {}

    return {str(key): str(value) for key, value in data.items() if value is not None}


def _candidates(languages: Iterable[str]) -> List[str]:
    """
    Expand language tags into lookup order.

    "fr-CA" is tried as-is, then as its primary subtag "fr".
    """
    out: List[str] = []
    for tag in languages:
        if not tag:
            continue
        tag = tag.strip().lower().replace("_", "-")
        for cand in (tag, tag.split("-", 1)[0]):
            if cand and cand not in out:
                out.append(cand)
    return out


class MessageCatalog:
    def __init__(self, tables: Dict[str, MessageTable], default_language: str = "en"):
        self.tables = tables
        self.default_language = default_language.lower()

    @classmethod
    def load(cls, directory: str | Path, default_language: str = "en") -> "MessageCatalog":
        """
        Read every <lang>.yml under `directory`.

        - The file stem is the language tag ("en.yml" -> "en")
        - A missing directory yields an empty catalog (every lookup fails)
        """
        directory = Path(directory)
        tables: Dict[str, MessageTable] = {}

        if not directory.is_dir():
            log.warning("Messages directory not found: %s", directory)
            return cls(tables, default_language)

        for path in sorted(directory.glob("*.yml")):
            tables[path.stem.lower()] = _load_table(path)

        log.info("Loaded message tables: %s", ", ".join(sorted(tables)) or "(none)")
        if default_language.lower() not in tables:
            log.warning("Default language %r has no message table", default_language)
        return cls(tables, default_language)

    @property
    def languages(self) -> List[str]:
        return sorted(self.tables)

    def resolve(self, key: str, languages: Iterable[str] = ()) -> tuple[str, str]:
        """Return (language, template) for the first language that defines `key`."""
        for lang in _candidates(list(languages) + [self.default_language]):
            table = self.tables.get(lang)
            if table and key in table:
                return lang, table[key]
        raise MessageNotFound(key)

    def translate(self, key: str, *args, languages: Iterable[str] = (), **kwargs) -> str:
        """
        Look up `key` and interpolate parameters.

        Templates use str.format placeholders: positional ("{0}") or named
        ("{title}").
        """
        _lang, template = self.resolve(key, languages)
        if not args and not kwargs:
            return template
        return template.format(*args, **kwargs)


# -------------------------------------------------------------------
# Request helpers
# -------------------------------------------------------------------


def request_languages() -> List[str]:
    """
    Preferred languages for the current request, best first.

    Order: ?_LANG=, session, cookie, Accept-Language.
    """
    cached: Optional[List[str]] = g.get("languages")
    if cached is not None:
        return cached

    langs: List[str] = []

    explicit = request.args.get(LANG_PARAM)
    if explicit:
        # Remember an explicit choice for later requests
        session[LANG_PARAM] = explicit
        langs.append(explicit)

    for value in (session.get(LANG_PARAM), request.cookies.get(LANG_PARAM)):
        if value:
            langs.append(value)

    langs.extend(request.accept_languages.values())

    g.languages = langs
    return langs


def get_catalog() -> MessageCatalog:
    return current_app.extensions["messages"]


def translate(key: str, *args, **kwargs) -> str:
    """Translate `key` for the current request."""
    return get_catalog().translate(key, *args, languages=request_languages(), **kwargs)


def init_app(app) -> MessageCatalog:
    catalog = MessageCatalog.load(app.config["MESSAGES_DIR"], app.config["DEFAULT_LANGUAGE"])
    app.extensions["messages"] = catalog
    # Templates call {{ _("MsgKey", ...) }}
    app.jinja_env.globals["_"] = translate
    return catalog
