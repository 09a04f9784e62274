"""Opaque identifier generation."""

from __future__ import annotations

import base64
import uuid

_STD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_ID_ALPHABET = "ybndrfg8ejkmcpqxot1uwisza345h769"
_TRANSLATION = str.maketrans(_STD_ALPHABET, _ID_ALPHABET)


def new_id() -> str:
    """Return a 26-character, URL-safe random identifier.

    A UUID4 encoded with a lowercase base32 alphabet that avoids easily
    confused characters (no ``0``/``l``/``v``).  Used for signup tokens.
    """
    encoded = base64.b32encode(uuid.uuid4().bytes).decode("ascii").rstrip("=")
    return encoded.translate(_TRANSLATION)
