# tests/test_i18n.py
import pytest

from blogapp.config import MESSAGES_DIR
from blogapp.i18n import MessageCatalog, MessageNotFound


@pytest.fixture
def catalog(tmp_path):
    (tmp_path / "en.yml").write_text(
        'Hello: "Hello"\nCreated: "Your post, {0}, was created"\nNamed: "Hi {name}"\nOnlyEn: "english only"\n',
        encoding="utf-8",
    )
    (tmp_path / "fr.yml").write_text(
        'Hello: "Bonjour"\nCreated: "Votre article, {0}, a été créé"\n',
        encoding="utf-8",
    )
    return MessageCatalog.load(tmp_path, "en")


def test_loads_one_table_per_file(catalog):
    assert catalog.languages == ["en", "fr"]


def test_requested_language(catalog):
    assert catalog.translate("Hello", languages=["fr"]) == "Bonjour"


def test_region_tag_uses_primary_language(catalog):
    assert catalog.translate("Hello", languages=["fr-CA"]) == "Bonjour"
    assert catalog.translate("Hello", languages=["FR_be"]) == "Bonjour"


def test_unsupported_language_falls_back_to_default(catalog):
    assert catalog.translate("Hello", languages=["de"]) == "Hello"
    assert catalog.translate("Hello") == "Hello"


def test_missing_key_in_language_falls_back(catalog):
    assert catalog.translate("OnlyEn", languages=["fr"]) == "english only"


def test_first_language_with_key_wins(catalog):
    assert catalog.translate("Hello", languages=["de", "fr", "en"]) == "Bonjour"


def test_positional_interpolation(catalog):
    assert catalog.translate("Created", "Hi", languages=["fr"]) == "Votre article, Hi, a été créé"


def test_named_interpolation(catalog):
    assert catalog.translate("Named", name="Ana") == "Hi Ana"


def test_unknown_key(catalog):
    with pytest.raises(MessageNotFound):
        catalog.translate("Nope", languages=["fr"])


def test_missing_directory(tmp_path):
    cat = MessageCatalog.load(tmp_path / "missing", "en")
    assert cat.languages == []
    with pytest.raises(KeyError):
        cat.translate("Hello")


def test_shipped_tables_cover_default_keys():
    cat = MessageCatalog.load(MESSAGES_DIR, "en")
    assert {"en", "fr"} <= set(cat.languages)
    assert cat.translate("MsgEntryCreated", "Title") == "Your new blog post, Title, has been created"
    # fr only lacks keys English provides, never the other way round
    assert set(cat.tables["fr"]) <= set(cat.tables["en"])
