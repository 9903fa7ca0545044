"""
Tests for translation bundles.

Bundles are checked when the module loads; these tests feed
broken bundles to the same check.
"""

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ficus.core.config import Language
from ficus.core.i18n import TRANSLATIONS, _validate_bundles, get_translations


class TestBundles:
    """Test the shipped bundles."""

    def test_every_language_present(self):
        assert set(TRANSLATIONS) == set(Language)

    def test_lookup(self):
        assert get_translations(Language.ENGLISH).missing_fields_error == "Please fill both ID and License Key."
        assert get_translations("hi") is TRANSLATIONS[Language.HINDI]

    def test_unknown_language_falls_back_to_english(self):
        assert get_translations("fr") is TRANSLATIONS[Language.ENGLISH]

    def test_five_weekdays(self):
        for bundle in TRANSLATIONS.values():
            assert len(bundle.weekdays) == 5

    def test_request_template_fills(self):
        for bundle in TRANSLATIONS.values():
            text = bundle.request_template.format(system_id="ABC123", token="REQ-x")
            assert "ABC123" in text


class TestValidation:
    """Test load-time validation."""

    def _with(self, language, **changes):
        bundles = dict(TRANSLATIONS)
        bundles[language] = replace(bundles[language], **changes)
        return bundles

    def test_shipped_bundles_valid(self):
        _validate_bundles(TRANSLATIONS)

    def test_missing_language(self):
        bundles = dict(TRANSLATIONS)
        del bundles[Language.HINDI]

        with pytest.raises(ValueError, match="hi"):
            _validate_bundles(bundles)

    def test_blank_string(self):
        with pytest.raises(ValueError, match="app_title"):
            _validate_bundles(self._with(Language.MARATHI, app_title="  "))

    def test_blank_list_item(self):
        items = ("",) + TRANSLATIONS[Language.HINDI].biases[1:]
        with pytest.raises(ValueError, match="biases"):
            _validate_bundles(self._with(Language.HINDI, biases=items))

    def test_list_length_mismatch(self):
        with pytest.raises(ValueError, match="weekdays"):
            _validate_bundles(self._with(Language.MARATHI, weekdays=("सोम",)))

    def test_template_missing_placeholder(self):
        with pytest.raises(ValueError, match="request_template"):
            _validate_bundles(self._with(Language.ENGLISH, request_template="ID: {system_id}"))
