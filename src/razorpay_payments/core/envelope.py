"""
Decoding of the success/error envelope returned by every endpoint.

The service does not emit a discriminant: an error body is an object with a
top-level ``error`` key, anything else is the resource itself. The error shape
is therefore tried first. A success payload that legitimately carried a
top-level ``error`` field would be misread as a failure; no endpoint does so
today, but the wire format leaves that door open.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from .errors import ApiError, SerializationError

__all__ = ["Decoder", "decode_envelope", "discard", "extract_api_error"]

T = TypeVar("T")

Decoder = Callable[[Any], T]


def discard(_: Any) -> None:
    """Decoder for endpoints whose success body carries no information."""
    return None


def extract_api_error(body: Any) -> Optional[ApiError]:
    """
    Return the :class:`ApiError` carried by ``body`` or ``None`` when the body
    is not shaped as an error envelope.
    """
    if not isinstance(body, dict) or "error" not in body:
        return None
    error = body["error"]
    if not isinstance(error, dict):
        raise SerializationError(f"Malformed error envelope: {body!r}")
    try:
        return ApiError.from_response(error)
    except (KeyError, TypeError, ValueError) as exc:
        raise SerializationError(f"Malformed error envelope: {exc}") from exc


def decode_envelope(body: Any, decoder: Decoder[T]) -> T:
    """
    Decode a parsed JSON ``body`` into ``decoder``'s result.

    Raises :class:`ApiError` for the error variant and
    :class:`SerializationError` when the body matches neither shape.
    """
    api_error = extract_api_error(body)
    if api_error is not None:
        raise api_error

    try:
        return decoder(body)
    except SerializationError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SerializationError(
            f"Response body does not match the expected shape: {exc!r}"
        ) from exc
