"""
Licensing module for Ficus.

Handles offline key derivation, request tokens and the admin console.
"""

from ficus.license.keys import derive_key, validate_key, encode_request_token, decode_request_token
from ficus.license.admin import extract_system_id, issue_key

__all__ = [
    "derive_key",
    "validate_key",
    "encode_request_token",
    "decode_request_token",
    "extract_system_id",
    "issue_key",
]
