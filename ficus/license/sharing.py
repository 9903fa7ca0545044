"""
Share strings for license requests and replies.

Messages are copied by hand into WhatsApp; only the text
format matters.
"""

from typing import Optional
from urllib.parse import quote

from ficus.core.i18n import Translations
from ficus.license.keys import encode_request_token, normalize_system_id


def request_message(system_id: str, translations: Translations, now_ms: Optional[int] = None) -> str:
    """Build the user's license request message."""
    sid = normalize_system_id(system_id)
    token = encode_request_token(sid, now_ms=now_ms)
    return translations.request_template.format(system_id=sid, token=token)


def response_message(system_id: str, key: str, translations: Translations) -> str:
    """Build the admin's reply carrying the license key."""
    return translations.response_template.format(
        system_id=normalize_system_id(system_id),
        key=key,
    )


def whatsapp_url(number: str, message: str) -> str:
    """Click-to-chat link with the message pre-filled."""
    digits = "".join(ch for ch in number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"
