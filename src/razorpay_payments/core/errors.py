"""
Exception hierarchy shared by the transport, the resource groups and the
webhook helpers.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "ApiError",
    "ConfigError",
    "InvalidIdError",
    "RazorpayError",
    "SerializationError",
    "TransportError",
    "WebhookError",
    "WebhookParseError",
    "WebhookSignatureError",
]


def _display(value: Optional[str]) -> str:
    return "none" if value is None else value


class RazorpayError(Exception):
    """Base class for every error surfaced by this package."""


class ConfigError(RazorpayError):
    """Missing or malformed client settings."""


class ApiError(RazorpayError):
    """
    The remote service rejected the request with a structured error body.
    """

    def __init__(
        self,
        code: str,
        description: str,
        *,
        source: Optional[str] = None,
        step: Optional[str] = None,
        reason: Optional[str] = None,
        metadata: Optional[Mapping[str, str]] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.description = description
        self.source = source
        self.step = step
        self.reason = reason
        self.metadata: Optional[Dict[str, str]] = (
            dict(metadata) if metadata is not None else None
        )
        self.field = field
        super().__init__(code, description)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ApiError":
        metadata = payload.get("metadata")
        if isinstance(metadata, list) and not metadata:
            metadata = {}
        if metadata is not None and not isinstance(metadata, Mapping):
            raise TypeError("error metadata must be an object")
        return cls(
            code=payload["code"],
            description=payload["description"],
            source=payload.get("source"),
            step=payload.get("step"),
            reason=payload.get("reason"),
            metadata=(
                {str(k): str(v) for k, v in metadata.items()}
                if metadata is not None
                else None
            ),
            field=payload.get("field"),
        )

    def __str__(self) -> str:
        metadata = (
            "none"
            if self.metadata is None
            else json.dumps(self.metadata, indent=4, sort_keys=True)
        )
        return (
            f"Razorpay Error: {self.code}: {self.description}\n\n"
            f"source: {_display(self.source)}\n"
            f"step: {_display(self.step)}\n"
            f"reason: {_display(self.reason)}\n"
            f"field: {_display(self.field)}\n"
            f"metadata: {metadata}"
        )

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, description={self.description!r})"


class TransportError(RazorpayError):
    """
    Network, TLS or HTTP-status failure.

    ``cause`` is the underlying :mod:`requests` exception. For non-2xx
    responses ``status_code`` and ``body`` are populated and, when the body is
    itself an error envelope, ``api_error`` holds the decoded :class:`ApiError`.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        api_error: Optional[ApiError] = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.status_code = status_code
        self.body = body
        self.api_error = api_error


class SerializationError(RazorpayError):
    """A request payload could not be encoded or a response body decoded."""


class InvalidIdError(SerializationError, ValueError):
    """An identifier does not carry the prefix its type requires."""

    def __init__(self, typename: str, prefix: str, value: object) -> None:
        self.typename = typename
        self.prefix = prefix
        self.value = value
        super().__init__(
            f"invalid `{typename}`, expected id to start with {prefix!r}, got {value!r}"
        )


class WebhookError(RazorpayError):
    """Base class for webhook verification failures."""


class WebhookSignatureError(WebhookError):
    """The received signature does not match the payload."""

    def __init__(self) -> None:
        super().__init__("Bad signature")


class WebhookParseError(WebhookError):
    """The payload was authentic but is not a valid webhook event."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Parsing error: {cause}")
        self.cause = cause
