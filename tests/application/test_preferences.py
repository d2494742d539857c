"""Tests for persisted client preferences."""

import pytest

from tests.fakes import FakeKeyValueStore
from wms.application.preferences import Language, Preferences, Theme
from wms.domain.exceptions import ValidationError


class TestPreferences:

    def test_defaults(self):
        prefs = Preferences(FakeKeyValueStore())
        assert prefs.theme == Theme.SYSTEM
        assert prefs.language == Language.EN

    def test_changes_are_persisted(self):
        storage = FakeKeyValueStore()
        Preferences(storage).set_theme("Dark")
        Preferences(storage).set_language("id")
        assert storage.data == {"theme": "dark", "language": "id"}
        assert Preferences(storage).theme == Theme.DARK

    def test_unknown_value_rejected(self):
        storage = FakeKeyValueStore()
        with pytest.raises(ValidationError, match="Unknown theme 'blue'"):
            Preferences(storage).set_theme("blue")
        assert storage.data == {}

    def test_corrupt_stored_value_falls_back(self):
        prefs = Preferences(FakeKeyValueStore({"theme": "neon", "language": "fr"}))
        assert prefs.theme == Theme.SYSTEM
        assert prefs.language == Language.EN

    @pytest.mark.parametrize("stored, prefers_dark, expected", [
        ("system", True, Theme.DARK),
        ("system", False, Theme.LIGHT),
        ("light", True, Theme.LIGHT),
    ])
    def test_effective_theme(self, stored, prefers_dark, expected):
        prefs = Preferences(FakeKeyValueStore({"theme": stored}))
        assert prefs.effective_theme(prefers_dark) == expected
