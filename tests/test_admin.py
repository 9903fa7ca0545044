"""
Tests for the admin key console, share messages and the lock screen.
"""

import sys
from pathlib import Path
from urllib.parse import unquote

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ficus.core.config import AppSettings, Config, Language
from ficus.core.i18n import get_translations
from ficus.core.session import ADMIN_CLICKS, AppSession, AppStatus, unlock_from_config
from ficus.license.admin import authenticate, extract_system_id, issue_key
from ficus.license.sharing import request_message, response_message, whatsapp_url

EN = get_translations(Language.ENGLISH)


@pytest.fixture
def config(tmp_path):
    return Config(database_path=str(tmp_path / "ficus.db"))


@pytest.fixture
def english():
    return AppSettings(language=Language.ENGLISH)


class TestExtractSystemId:
    """Test reading the System ID out of pasted requests."""

    def test_full_request_message(self):
        message = request_message("trader-01", EN, now_ms=1700000000000)
        result = extract_system_id(message, EN)

        assert result.ok
        assert result.system_id == "TRADER-01"

    def test_markdown_and_emoji_stripped(self):
        result = extract_system_id("*🆔 ID: abc123*", EN)
        assert result.system_id == "ABC123"
        assert result.ok

    def test_id_label_case_insensitive(self):
        assert extract_system_id("system id: xyz_9", EN).system_id == "XYZ_9"

    def test_first_word_fallback(self):
        result = extract_system_id("abc123 please unlock", EN)
        assert result.system_id == "ABC123"
        assert result.ok

    def test_single_letter_word_not_taken(self):
        result = extract_system_id("a", EN)
        assert result.system_id == ""
        assert result.error == EN.id_not_found

    @pytest.mark.parametrize("message", ["", "   ", None])
    def test_blank_message(self, message):
        result = extract_system_id(message, EN)
        assert not result.ok
        assert result.error == EN.id_not_found

    def test_too_short(self):
        result = extract_system_id("ID: a", EN)
        assert result.system_id == "A"
        assert result.error == EN.id_too_short

    def test_invalid_characters(self):
        result = extract_system_id("ID: abc.123", EN)
        assert result.error == EN.id_invalid_chars
        assert not result.ok

    def test_localized_errors(self):
        marathi = get_translations(Language.MARATHI)
        assert extract_system_id("", marathi).error == marathi.id_not_found


class TestIssueKey:
    """Test key issuing from a message."""

    def test_issue(self, config):
        issue = issue_key("🆔 ID: abc123", config, EN)

        assert issue.system_id == "ABC123"
        assert issue.key == "KEY-1233-97A9"
        assert issue.error is None

    def test_issue_uses_configured_salt(self, config):
        config.license_salt = "SALT"
        assert issue_key("ID: ABC123", config, EN).key == "KEY-176D-DCFA"

    def test_issue_error(self, config):
        issue = issue_key("ID: ab#c", config, EN)

        assert issue.key == ""
        assert issue.error == EN.id_invalid_chars


class TestSharing:
    """Test request and response messages."""

    def test_request_message(self):
        message = request_message("abc123", EN, now_ms=1700000000000)

        assert "🆔 ID: ABC123" in message
        assert "REQ-eyJzaWQiOiJBQkMxMjMi" in message

    def test_response_message(self):
        message = response_message("abc123", "KEY-1233-97A9", EN)

        assert "ABC123" in message
        assert "KEY-1233-97A9" in message

    def test_whatsapp_url(self):
        url = whatsapp_url("+91 00000 00000", "ID: ABC 123")

        assert url.startswith("https://wa.me/910000000000?text=")
        assert unquote(url.split("text=", 1)[1]) == "ID: ABC 123"
        assert " " not in url


class TestAuthenticate:
    """Test the admin PIN."""

    def test_correct_pin(self, config):
        assert authenticate("1111", config) is True

    @pytest.mark.parametrize("pin", ["", "0000", "11111", None])
    def test_wrong_pin(self, config, pin):
        assert authenticate(pin, config) is False


class TestAppSession:
    """Test the lock screen state machine."""

    def test_starts_locked(self, config):
        assert AppSession(config).status == AppStatus.LOCKED

    def test_unlock(self, config, english):
        session = AppSession(config, english)

        assert session.unlock("abc123", " key-1233-97a9 ") is None
        assert session.status == AppStatus.UNLOCKED
        assert session.system_id == "ABC123"
        assert session.error is None

    def test_missing_fields(self, config, english):
        session = AppSession(config, english)

        assert session.unlock("ABC123", "") == EN.missing_fields_error
        assert session.unlock("", "KEY-1233-97A9") == EN.missing_fields_error
        assert session.status == AppStatus.LOCKED

    def test_invalid_key(self, config, english):
        session = AppSession(config, english)

        assert session.unlock("ABC123", "KEY-0000-0000") == EN.invalid_key_error
        assert session.error == EN.invalid_key_error
        assert session.status == AppStatus.LOCKED

    def test_error_in_settings_language(self, config):
        session = AppSession(config)
        marathi = get_translations(Language.MARATHI)

        assert session.unlock("ABC123", "") == marathi.missing_fields_error

    def test_lock(self, config, english):
        session = AppSession(config, english)
        session.unlock("ABC123", "KEY-1233-97A9")
        session.lock()

        assert session.status == AppStatus.LOCKED
        assert session.system_id == ""

    def test_hidden_admin_entry(self, config):
        session = AppSession(config)

        for _ in range(ADMIN_CLICKS - 1):
            assert session.header_click() == AppStatus.LOCKED
        assert session.header_click() == AppStatus.ADMIN_AUTH

    def test_admin_login(self, config):
        session = AppSession(config)
        assert session.admin_login("1111") is False

        for _ in range(ADMIN_CLICKS):
            session.header_click()

        assert session.admin_login("0000") is False
        assert session.status == AppStatus.ADMIN_AUTH
        assert session.admin_login("1111") is True
        assert session.status == AppStatus.ADMIN_DASHBOARD

        session.back()
        assert session.status == AppStatus.LOCKED

    def test_clicks_ignored_when_unlocked(self, config, english):
        session = AppSession(config, english)
        session.unlock("ABC123", "KEY-1233-97A9")

        for _ in range(ADMIN_CLICKS):
            session.header_click()
        assert session.status == AppStatus.UNLOCKED


class TestUnlockFromConfig:
    """Test unlocking with configured credentials."""

    def test_configured_credentials(self, config, english):
        config.system_id = "ABC123"
        config.license_key = "KEY-1233-97A9"

        session = unlock_from_config(config, english)
        assert session.status == AppStatus.UNLOCKED

    def test_explicit_values_win(self, config, english):
        config.system_id = "ABC123"
        config.license_key = "KEY-1233-97A9"

        session = unlock_from_config(config, english, "XYZ", "KEY-2E1D-69C0")
        assert session.system_id == "XYZ"

    def test_nothing_configured(self, config, english):
        session = unlock_from_config(config, english)

        assert session.status == AppStatus.LOCKED
        assert session.error == EN.missing_fields_error
