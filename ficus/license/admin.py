"""
Admin key console.

Finds the System ID in a pasted WhatsApp request and issues
the matching license key.
"""

import hmac
import logging
import re
from dataclasses import dataclass
from typing import Optional

from ficus.core.config import Config
from ficus.core.i18n import Translations
from ficus.license.keys import derive_key

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r"ID:\s*([^\n\s*]+)", re.IGNORECASE)
INVALID_ID_CHARS = re.compile(r"[^A-Z0-9\-_]")
STRIP_CHARS = re.compile(r"[*🆔🔑]")

MIN_SYSTEM_ID_LENGTH = 2


@dataclass
class SystemIdExtraction:
    """Result of reading a System ID out of a message."""
    system_id: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.system_id) and self.error is None


@dataclass
class KeyIssue:
    """A System ID with its key, or the reason there is no key."""
    system_id: str
    key: str = ""
    error: Optional[str] = None


def authenticate(pin: str, config: Config) -> bool:
    """Check the admin PIN."""
    ok = hmac.compare_digest((pin or "").encode(), config.admin_pin.encode())
    if not ok:
        logger.warning("Admin login rejected")
    return ok


def extract_system_id(message: str, translations: Translations) -> SystemIdExtraction:
    """
    Read the System ID from a pasted request.

    Looks for "ID: <value>" first, then falls back to the first
    word when it is longer than one character. Never raises;
    problems come back as a localized error.
    """
    if not message or not message.strip():
        return SystemIdExtraction("", translations.id_not_found)

    sid = ""
    match = ID_PATTERN.search(message)
    if match and match.group(1):
        sid = match.group(1).strip()
    else:
        first_word = message.split()[0]
        if len(first_word) > 1:
            sid = first_word

    clean = STRIP_CHARS.sub("", sid).strip().upper()

    if not clean:
        return SystemIdExtraction("", translations.id_not_found)
    if len(clean) < MIN_SYSTEM_ID_LENGTH:
        return SystemIdExtraction(clean, translations.id_too_short)
    if INVALID_ID_CHARS.search(clean):
        return SystemIdExtraction(clean, translations.id_invalid_chars)

    return SystemIdExtraction(clean)


def issue_key(message: str, config: Config, translations: Translations) -> KeyIssue:
    """Extract the System ID from a message and derive its key."""
    extraction = extract_system_id(message, translations)
    if not extraction.ok:
        return KeyIssue(extraction.system_id, error=extraction.error)

    key = derive_key(extraction.system_id, config.license_salt)
    logger.info(f"Issued key for {extraction.system_id}")
    return KeyIssue(extraction.system_id, key)
