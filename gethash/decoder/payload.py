"""
Base64 decoding of encoded line fields.

Follows the forgiving rules browsers apply in ``atob``: ASCII whitespace is
ignored and trailing padding is optional.
"""

import base64
import binascii
import re

from gethash.utils.errors import InvalidBase64Error

_WHITESPACE = re.compile(r"[\t\n\f\r ]+")
_ALPHABET = re.compile(r"[A-Za-z0-9+/]*")


def decode_payload(field: str) -> str:
    """
    Decode a base64 field into a string with one character per byte.

    Args:
        field: Base64 text, padding optional

    Returns:
        Decoded bytes as a latin-1 string (code points 0-255)

    Raises:
        InvalidBase64Error: If the field is not valid base64
    """
    data = _WHITESPACE.sub("", field)

    if len(data) % 4 == 0 and data.endswith("="):
        data = data[:-2] if data.endswith("==") else data[:-1]

    if not _ALPHABET.fullmatch(data):
        raise InvalidBase64Error(field, "characters outside the base64 alphabet")
    if len(data) % 4 == 1:
        raise InvalidBase64Error(field, "truncated final quantum")

    try:
        raw = base64.b64decode(data + "=" * (-len(data) % 4), validate=True)
    except binascii.Error as e:
        raise InvalidBase64Error(field, str(e)) from e

    return raw.decode("latin-1")
