"""
HMAC-SHA256 signatures used to authenticate webhook deliveries.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Union

__all__ = ["sign", "verify_signature"]


def _as_bytes(value: Union[bytes, str]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def sign(body: Union[bytes, str], secret: str) -> str:
    """
    Return the lowercase hex HMAC-SHA256 of ``body`` keyed with ``secret``.
    """
    digest = hmac.new(_as_bytes(secret), _as_bytes(body), hashlib.sha256)
    return digest.hexdigest()


def verify_signature(body: Union[bytes, str], signature: str, secret: str) -> bool:
    if not isinstance(signature, (bytes, str)):
        return False
    expected = sign(body, secret)
    return hmac.compare_digest(expected.encode("ascii"), _as_bytes(signature))
