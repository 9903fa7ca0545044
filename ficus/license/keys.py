"""
Offline license keys.

A key is derived from the System ID and a shared salt with a
32-bit rolling hash, so admin and user can pair without a server.
"""

import base64
import json
import logging
from typing import List, Optional

from ficus.core.config import DEFAULT_SALT
from ficus.core.utils import now_millis

logger = logging.getLogger(__name__)

REQUEST_PREFIX = "REQ-"
REQUEST_TOKEN_LENGTH = 24

_UINT32 = 0x100000000
_INT32_MAX = 0x7FFFFFFF


def normalize_system_id(system_id: Optional[str]) -> str:
    """Trim and upper-case a System ID."""
    return (system_id or "").strip().upper()


def _code_units(text: str) -> List[int]:
    """UTF-16 code units of text (astral characters become surrogate pairs)."""
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def rolling_hash(text: str) -> int:
    """
    32-bit signed rolling hash.

    h = h * 31 + c for every UTF-16 code unit, wrapped to
    two's-complement 32 bits after each step.
    """
    h = 0
    for c in _code_units(text):
        h = (h * 31 + c) % _UINT32
        if h > _INT32_MAX:
            h -= _UINT32
    return h


def hash_to_hex(value: int) -> str:
    """
    Render a hash as exactly 8 uppercase hex digits.

    abs() works on unbounded ints, so -2**31 becomes 80000000.
    """
    return format(abs(value), "X").rjust(8, "0")[:8]


def derive_key(system_id: str, salt: str = DEFAULT_SALT) -> str:
    """
    Derive the license key for a System ID.

    Returns:
        "KEY-XXXX-XXXX", or "" when system_id is blank
    """
    sid = normalize_system_id(system_id)
    if not sid:
        return ""

    hex_digits = hash_to_hex(rolling_hash(sid + salt))
    return f"KEY-{hex_digits[:4]}-{hex_digits[4:8]}"


def validate_key(system_id: str, provided_key: str, salt: str = DEFAULT_SALT) -> bool:
    """
    Check a license key against a System ID.

    Comparison ignores case and surrounding whitespace of the key.
    """
    expected = derive_key(system_id, salt)
    if not expected:
        return False

    return (provided_key or "").strip().upper() == expected


def encode_request_token(system_id: str, now_ms: Optional[int] = None) -> str:
    """
    Package a System ID as a shareable request token.

    The token is REQ- plus the first 20 base64 characters of
    {"sid": ..., "ts": ...}. It is meant for humans to paste,
    not for decoding.
    """
    payload = {
        "sid": normalize_system_id(system_id),
        "ts": now_millis() if now_ms is None else now_ms,
    }
    encoded = base64.b64encode(
        json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    ).decode("ascii")

    return f"{REQUEST_PREFIX}{encoded}"[:REQUEST_TOKEN_LENGTH]


def decode_request_token(token: str) -> str:
    """
    Passthrough for request tokens.

    Plain IDs come back upper-cased; REQ- tokens are returned
    unchanged since the encoded payload is truncated.
    """
    if not token.startswith(REQUEST_PREFIX):
        return token.upper()
    return token
